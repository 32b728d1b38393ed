"""Core immutable world ``State`` dataclass.

This module defines the frozen :class:`State` object that represents the
entire game snapshot at a single turn: the map, every entity and its
components, the message log and the player's inventory. Systems are pure
functions that take a previous ``State`` plus inputs (e.g. a ``Command``) and
return a *new* ``State``; no mutation happens in-place. This is what makes the
save file a plain dump of one value and keeps turn resolution deterministic.

Design notes:

* Component stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    ``EntityID``. Absence of a key means the entity does not currently possess
    that component.
* Entity order is ascending ``EntityID``; ``PLAYER_ID`` (0) is always the
    player. Monsters are never removed: when they die they lose ``Fighter``
    and ``AI`` and gain ``Dead``.
* The map is a persistent vector of rows, ``tiles[y][x]``, with fixed
    dimensions.
* ``messages`` is append-only during play. The renderer shows the tail.
* ``lose`` is set once the player dies; the session keeps running so the
    player can look around before leaving.

See :mod:`grid_rogue.step` for how the reducer orchestrates systems.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pyrsistent import PMap, PVector, pmap, pvector

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
from grid_rogue.entity import PLAYER_ID, Entity
from grid_rogue.types import Color, EntityID


DEFAULT_INVENTORY_CAPACITY = 26


@dataclass(frozen=True)
class Tile:
    """One map cell.

    Attributes:
        blocked: Nothing can walk through.
        block_sight: Light stops here (the tile itself is still visible).
        explored: The player has seen this tile at least once.
    """

    blocked: bool
    block_sight: bool
    explored: bool = False


WALL = Tile(blocked=True, block_sight=True)
FLOOR = Tile(blocked=False, block_sight=False)


@dataclass(frozen=True)
class Message:
    """One line of the message log."""

    text: str
    color: Color = Color.WHITE


Tiles = PVector[PVector[Tile]]


class InvalidStateError(ValueError):
    """Raised when a state violates a structural invariant."""


@dataclass(frozen=True)
class State:
    """Immutable world state.

    Instances are *value objects*; every transition creates a new ``State``.
    Only include persistent / serializable data here (no open handles,
    caches or field-of-view masks).

    Attributes:
        width (int): Map width in tiles.
        height (int): Map height in tiles.
        tiles (PVector[PVector[Tile]]): Map cells indexed ``tiles[y][x]``.
        entity (PMap[EntityID, Entity]): Registry of entity identities.
        ai (PMap[EntityID, AI]): Monster behaviour records.
        appearance (PMap[EntityID, Appearance]): Glyph, colour and draw order.
        blocking (PMap[EntityID, Blocking]): Entities that occupy their tile.
        dead (PMap[EntityID, Dead]): Marker for killed fighters.
        fighter (PMap[EntityID, Fighter]): Combat records.
        inventory (PMap[EntityID, Inventory]): Ordered carried items.
        item (PMap[EntityID, Item]): Usable item records.
        position (PMap[EntityID, Position]): Grid position of on-map entities.
        messages (PVector[Message]): Message log, oldest first.
        inventory_capacity (int): Maximum number of carried items.
        turn (int): Number of turns the player has taken.
        lose (bool): True once the player has died.
        seed (int | None): Base RNG seed for monster decisions.
    """

    # Level
    width: int
    height: int
    tiles: Tiles = pvector()

    # Entity
    entity: PMap[EntityID, Entity] = pmap()

    # Components
    ai: PMap[EntityID, AI] = pmap()
    appearance: PMap[EntityID, Appearance] = pmap()
    blocking: PMap[EntityID, Blocking] = pmap()
    dead: PMap[EntityID, Dead] = pmap()
    fighter: PMap[EntityID, Fighter] = pmap()
    inventory: PMap[EntityID, Inventory] = pmap()
    item: PMap[EntityID, Item] = pmap()
    position: PMap[EntityID, Position] = pmap()

    # Log
    messages: PVector[Message] = pvector()

    # Rules
    inventory_capacity: int = DEFAULT_INVENTORY_CAPACITY

    # Status
    turn: int = 0
    lose: bool = False

    # RNG
    seed: Optional[int] = None

    @property
    def player_id(self) -> EntityID:
        return PLAYER_ID

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse view of non-empty fields.

        Component maps that hold no entries are skipped so diagnostics stay
        short. The map grid is summarised by its dimensions only.

        Returns:
            PMap[str, Any]: Persistent map of field name to value for all
            populated fields.
        """
        description: PMap[str, Any] = pmap()
        for field in self.__dataclass_fields__:
            if field == "tiles":
                continue
            value = getattr(self, field)
            if isinstance(value, type(pmap())) and len(value) == 0:
                continue
            description = description.set(field, value)
        return description


def create_tiles(width: int, height: int, tile: Tile = WALL) -> Tiles:
    """Return a ``height`` x ``width`` grid filled with ``tile``."""
    row = pvector([tile] * width)
    return pvector([row] * height)


def create_empty_state(
    width: int,
    height: int,
    seed: Optional[int] = None,
    inventory_capacity: int = DEFAULT_INVENTORY_CAPACITY,
) -> State:
    """Return a state with a solid-wall map and no entities."""
    return State(
        width=width,
        height=height,
        tiles=create_tiles(width, height),
        inventory_capacity=inventory_capacity,
        seed=seed,
    )


def validate_state(state: State, require_live_player: bool = True) -> State:
    """Check the structural invariants of ``state`` and return it unchanged.

    Arguments:
        state: State to check.
        require_live_player: Also demand that the player is alive (true at
            session start; a save of a finished game may hold a dead player).

    Raises:
        InvalidStateError: On the first violated invariant.
    """
    if state.width <= 0 or state.height <= 0:
        raise InvalidStateError(f"Invalid map size {state.width}x{state.height}")
    if len(state.tiles) != state.height or any(
        len(row) != state.width for row in state.tiles
    ):
        raise InvalidStateError(
            f"Map grid does not match declared size {state.width}x{state.height}"
        )
    if PLAYER_ID not in state.entity:
        raise InvalidStateError("State contains no player")
    if PLAYER_ID not in state.position or PLAYER_ID not in state.fighter:
        raise InvalidStateError("Player has no position or fighter record")
    if require_live_player and PLAYER_ID in state.dead:
        raise InvalidStateError("Player is dead")

    inventory = state.inventory.get(PLAYER_ID)
    if inventory is None:
        raise InvalidStateError("Player has no inventory")
    if len(inventory.item_ids) > state.inventory_capacity:
        raise InvalidStateError(
            f"Inventory holds {len(inventory.item_ids)} items, "
            f"capacity is {state.inventory_capacity}"
        )
    if len(set(inventory.item_ids)) != len(inventory.item_ids):
        raise InvalidStateError("Inventory lists the same item more than once")
    for item_id in inventory.item_ids:
        if item_id not in state.item:
            raise InvalidStateError(f"Inventory entry {item_id} is not an item")
        if item_id in state.position:
            raise InvalidStateError(f"Carried item {item_id} is also on the map")

    for store_name in (
        "ai",
        "appearance",
        "blocking",
        "dead",
        "fighter",
        "inventory",
        "item",
        "position",
    ):
        store: PMap[EntityID, Any] = getattr(state, store_name)
        unknown = set(store) - set(state.entity)
        if unknown:
            raise InvalidStateError(
                f"Component store '{store_name}' references unknown entities {sorted(unknown)}"
            )

    for eid, pos in state.position.items():
        if not (0 <= pos.x < state.width and 0 <= pos.y < state.height):
            raise InvalidStateError(f"Entity {eid} is outside the map at {pos}")
    for eid, fighter in state.fighter.items():
        if not 0 <= fighter.hp <= fighter.max_hp:
            raise InvalidStateError(
                f"Entity {eid} has {fighter.hp} hit points out of {fighter.max_hp}"
            )
    for eid in state.ai:
        if eid not in state.fighter or eid not in state.position:
            raise InvalidStateError(f"AI entity {eid} has no fighter or position")
        if eid in state.dead:
            raise InvalidStateError(f"Dead entity {eid} still has an AI")
    return state
