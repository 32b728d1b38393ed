from dataclasses import replace
from typing import Optional, Sequence, Union

import numpy as np

from grid_rogue.components import Position
from grid_rogue.config import GameConfig
from grid_rogue.input import NO_EVENT, InputEvent
from grid_rogue.levels.entity_spec import EntitySpec
from grid_rogue.levels.factories import create_orc, create_player, spawn
from grid_rogue.persistence import SaveStore
from grid_rogue.session.context import GameContext
from grid_rogue.state import FLOOR, WALL, State, create_empty_state, create_tiles
from grid_rogue.systems.fov import View
from grid_rogue.types import EntityID
from grid_rogue.utils.grid import set_tile
from grid_rogue.utils.inventory import add_item


def make_floor_state(width: int = 10, height: int = 10, seed: int = 1) -> State:
    """Empty open map (all floor, no entities)."""
    state = create_empty_state(width, height, seed=seed)
    return replace(state, tiles=create_tiles(width, height, FLOOR))


def make_player_state(
    player_pos: tuple[int, int] = (1, 1),
    width: int = 10,
    height: int = 10,
    wall_positions: Sequence[tuple[int, int]] = (),
    seed: int = 1,
) -> State:
    """Open map with the player (id 0) and optional wall tiles."""
    state = make_floor_state(width, height, seed)
    for x, y in wall_positions:
        state = set_tile(state, Position(x, y), WALL)
    state, player_id = spawn(state, create_player(), Position(*player_pos))
    assert player_id == 0
    return state


def make_monster(
    state: State, pos: tuple[int, int], spec: Optional[EntitySpec] = None
) -> tuple[State, EntityID]:
    return spawn(state, spec or create_orc(), Position(*pos))


def give_item(state: State, spec: EntitySpec) -> tuple[State, EntityID]:
    """Spawn an item straight into the player's inventory."""
    state, item_id = spawn(state, spec)
    inventory = add_item(state.inventory[state.player_id], item_id)
    return replace(state, inventory=state.inventory.set(state.player_id, inventory)), item_id


def full_view(state: State) -> View:
    """A view where the whole map is visible."""
    return View(
        visible=np.ones((state.height, state.width), dtype=bool),
        origin=state.position[state.player_id],
    )


def small_config(tmp_path, **overrides) -> GameConfig:
    config = GameConfig(
        screen_width=40,
        screen_height=30,
        map_width=40,
        map_height=24,
        max_rooms=8,
        seed=7,
        save_path=str(tmp_path / "savegame.json"),
    )
    return replace(config, **overrides)


ScriptEntry = Union[str, None, InputEvent]


class ScriptedInput:
    """Input source replaying a fixed list of events; closes once exhausted.

    ``None`` entries are polls without a key, strings are key names.
    """

    def __init__(self, script: Sequence[ScriptEntry]) -> None:
        self.events = [
            entry if isinstance(entry, InputEvent) else InputEvent(key=entry)
            for entry in script
        ]
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def poll(self) -> InputEvent:
        if not self.events:
            self._closed = True
            return NO_EVENT
        return self.events.pop(0)

    def wait(self) -> InputEvent:
        while not self._closed:
            event = self.poll()
            if event.key is not None:
                return event
        return NO_EVENT


class RecordingRenderer:
    """Renderer that remembers what it was asked to draw."""

    def __init__(self) -> None:
        self.frames: list[tuple[State, View, bool, Optional[Position]]] = []
        self.menus: list[tuple[str, list[str]]] = []

    def render(
        self, state: State, view: View, recompute: bool, pointer: Optional[Position]
    ) -> None:
        self.frames.append((state, view, recompute, pointer))

    def render_menu(self, header: str, options: Sequence[str]) -> None:
        self.menus.append((header, list(options)))


def make_context(
    config: GameConfig,
    script: Sequence[ScriptEntry],
    store: Optional[SaveStore] = None,
) -> GameContext:
    return GameContext(
        config=config,
        renderer=RecordingRenderer(),
        input=ScriptedInput(script),
        store=store or SaveStore(config.save_path),
    )


def assert_entity_positions(
    state: State, expected: dict[EntityID, tuple[int, int]],
) -> None:
    """Check that expected entities are at the right positions."""
    for eid, (x, y) in expected.items():
        actual = state.position.get(eid)
        assert actual == Position(x, y), (
            f"Entity {eid} expected at {(x, y)}, got {actual}"
        )
