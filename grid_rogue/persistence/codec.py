"""Save file codec.

Turns a :class:`grid_rogue.state.State` into UTF-8 JSON bytes and back. The
payload is wrapped in an envelope naming the format and the schema version;
anything else is rejected instead of being misread::

    {
      "format": "grid-rogue-save",
      "version": 1,
      "state": {
        "width": 80, "height": 43,
        "tiles": ["3333...", ...],
        "entities": [{"id": 0, "name": "player", "position": {...}, ...}, ...],
        "messages": [["Welcome stranger!", "red"], ...],
        "inventory_capacity": 26, "turn": 12, "lose": false, "seed": 7
      }
    }

Tiles are stored one string per row, one digit per tile: bit 0 ``blocked``,
bit 1 ``block_sight``, bit 2 ``explored``. Entities are listed in id order
with only the components they carry.

Round trip: ``decode_state(encode_state(s)) == s`` for every valid state.
Decoding validates the structural invariants of the result, so a decoded
state is either complete and valid or not returned at all.
"""

import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from pyrsistent import pmap, pvector

from grid_rogue.components import (
    AI,
    Appearance,
    Blocking,
    Dead,
    Fighter,
    Inventory,
    Item,
    Position,
)
from grid_rogue.entity import Entity, entity_ids_in_order
from grid_rogue.state import Message, State, Tile, validate_state
from grid_rogue.types import AIBehavior, Color, DeathBehavior, EntityID, ItemEffect

from .errors import SaveDecodeError, SaveEncodeError, SaveVersionError


SAVE_FORMAT = "grid-rogue-save"
SAVE_VERSION = 1


# -------- Encoding --------


def _encode_tile(tile: Tile) -> str:
    return str(int(tile.blocked) | int(tile.block_sight) << 1 | int(tile.explored) << 2)


def _encode_entity(state: State, eid: EntityID) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": eid, "name": state.entity[eid].name}
    if eid in state.position:
        record["position"] = asdict(state.position[eid])
    if eid in state.appearance:
        record["appearance"] = asdict(state.appearance[eid])
    if eid in state.blocking:
        record["blocking"] = True
    if eid in state.dead:
        record["dead"] = True
    if eid in state.fighter:
        record["fighter"] = asdict(state.fighter[eid])
    if eid in state.ai:
        record["ai"] = asdict(state.ai[eid])
    if eid in state.item:
        record["item"] = asdict(state.item[eid])
    if eid in state.inventory:
        record["inventory"] = list(state.inventory[eid].item_ids)
    return record


def state_to_dict(state: State) -> Dict[str, Any]:
    """Return the JSON-ready ``state`` section of a save payload."""
    return {
        "width": state.width,
        "height": state.height,
        "tiles": ["".join(_encode_tile(tile) for tile in row) for row in state.tiles],
        "entities": [_encode_entity(state, eid) for eid in entity_ids_in_order(state)],
        "messages": [[m.text, str(m.color)] for m in state.messages],
        "inventory_capacity": state.inventory_capacity,
        "turn": state.turn,
        "lose": state.lose,
        "seed": state.seed,
    }


def encode_state(state: State) -> bytes:
    """Serialize ``state`` into save file bytes.

    Raises:
        SaveEncodeError: If the state cannot be represented.
    """
    try:
        envelope = {
            "format": SAVE_FORMAT,
            "version": SAVE_VERSION,
            "state": state_to_dict(state),
        }
        return json.dumps(envelope, indent=1, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, KeyError, AttributeError) as exc:
        raise SaveEncodeError(f"Cannot encode state: {exc}") from exc


# -------- Decoding --------


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {value!r}")
    return value


def _bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected boolean, got {value!r}")
    return value


def _str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {value!r}")
    return value


def _list(value: Any) -> List[Any]:
    if not isinstance(value, list):
        raise TypeError(f"expected list, got {type(value).__name__}")
    return value


def _dict(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"expected object, got {type(value).__name__}")
    return value


def _decode_tile(char: str) -> Tile:
    bits = int(char)
    if not 0 <= bits <= 7:
        raise ValueError(f"invalid tile code {char!r}")
    return Tile(blocked=bool(bits & 1), block_sight=bool(bits & 2), explored=bool(bits & 4))


def _decode_position(raw: Any) -> Position:
    d = _dict(raw)
    return Position(x=_int(d["x"]), y=_int(d["y"]))


def _decode_appearance(raw: Any) -> Appearance:
    d = _dict(raw)
    return Appearance(
        glyph=_str(d["glyph"]), color=Color(_str(d["color"])), priority=_int(d["priority"])
    )


def _decode_fighter(raw: Any) -> Fighter:
    d = _dict(raw)
    return Fighter(
        max_hp=_int(d["max_hp"]),
        hp=_int(d["hp"]),
        defense=_int(d["defense"]),
        power=_int(d["power"]),
        on_death=DeathBehavior(_str(d["on_death"])),
    )


def _decode_ai(raw: Any) -> AI:
    d = _dict(raw)
    previous: Optional[AIBehavior] = None
    if d["previous"] is not None:
        previous = AIBehavior(_str(d["previous"]))
    return AI(
        behavior=AIBehavior(_str(d["behavior"])),
        previous=previous,
        turns_left=_int(d["turns_left"]),
    )


def _decode_item(raw: Any) -> Item:
    return Item(effect=ItemEffect(_str(_dict(raw)["effect"])))


def dict_to_state(data: Dict[str, Any]) -> State:
    """Build a :class:`State` from the ``state`` section of a save payload.

    Raises:
        KeyError, TypeError, ValueError: On malformed input.
    """
    width = _int(data["width"])
    height = _int(data["height"])
    tiles = pvector(
        pvector(_decode_tile(char) for char in _str(row)) for row in _list(data["tiles"])
    )

    stores: Dict[str, Dict[EntityID, Any]] = {
        "entity": {},
        "ai": {},
        "appearance": {},
        "blocking": {},
        "dead": {},
        "fighter": {},
        "inventory": {},
        "item": {},
        "position": {},
    }
    for raw in _list(data["entities"]):
        record = _dict(raw)
        eid = _int(record["id"])
        if eid in stores["entity"]:
            raise ValueError(f"duplicate entity id {eid}")
        stores["entity"][eid] = Entity(name=_str(record["name"]))
        if "position" in record:
            stores["position"][eid] = _decode_position(record["position"])
        if "appearance" in record:
            stores["appearance"][eid] = _decode_appearance(record["appearance"])
        if _bool(record.get("blocking", False)):
            stores["blocking"][eid] = Blocking()
        if _bool(record.get("dead", False)):
            stores["dead"][eid] = Dead()
        if "fighter" in record:
            stores["fighter"][eid] = _decode_fighter(record["fighter"])
        if "ai" in record:
            stores["ai"][eid] = _decode_ai(record["ai"])
        if "item" in record:
            stores["item"][eid] = _decode_item(record["item"])
        if "inventory" in record:
            stores["inventory"][eid] = Inventory(
                pvector(_int(i) for i in _list(record["inventory"]))
            )

    messages = pvector(
        Message(text=_str(entry[0]), color=Color(_str(entry[1])))
        for entry in (_list(e) for e in _list(data["messages"]))
    )
    seed = data["seed"]

    state = State(
        width=width,
        height=height,
        tiles=tiles,
        messages=messages,
        inventory_capacity=_int(data["inventory_capacity"]),
        turn=_int(data["turn"]),
        lose=_bool(data["lose"]),
        seed=None if seed is None else _int(seed),
        **{name: pmap(store) for name, store in stores.items()},
    )
    return validate_state(state, require_live_player=False)


def decode_state(payload: bytes) -> State:
    """Deserialize save file bytes.

    Raises:
        SaveVersionError: If the envelope carries another schema version.
        SaveDecodeError: If the payload is not a well formed save.
    """
    try:
        envelope = _dict(json.loads(payload.decode("utf-8")))
    except (UnicodeDecodeError, ValueError, TypeError, RecursionError) as exc:
        raise SaveDecodeError(f"Save file is not valid JSON: {exc}") from exc

    if envelope.get("format") != SAVE_FORMAT:
        raise SaveDecodeError(f"Not a save file (format {envelope.get('format')!r})")
    version = envelope.get("version")
    if isinstance(version, bool) or version != SAVE_VERSION:
        raise SaveVersionError(version, SAVE_VERSION)

    try:
        return dict_to_state(_dict(envelope.get("state")))
    except (KeyError, IndexError, TypeError, ValueError, RecursionError) as exc:
        raise SaveDecodeError(f"Malformed save state: {exc!r}") from exc
