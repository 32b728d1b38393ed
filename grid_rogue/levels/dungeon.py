"""Rooms-and-tunnels dungeon generator.

Carves up to ``max_rooms`` non-overlapping rectangular rooms out of a solid
map, joins each new room to the previous one with an L-shaped tunnel (the bend
direction is random), puts the player in the centre of the first room and
populates every other room with monsters and items.

All randomness comes from the ``random.Random`` passed in, so a seed fully
determines the level.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Callable, List, Tuple

from grid_rogue.components import Position
from grid_rogue.config import GameConfig
from grid_rogue.state import FLOOR, State
from grid_rogue.utils.grid import is_blocked_at, set_tile

from .entity_spec import EntitySpec
from .factories import (
    create_confuse_scroll,
    create_fireball_scroll,
    create_healing_potion,
    create_lightning_scroll,
    create_orc,
    create_troll,
    spawn,
)


logger = logging.getLogger(__name__)

# (upper bound of the d100 roll, blueprint factory)
SpawnTable = List[Tuple[int, Callable[[], EntitySpec]]]

MONSTER_TABLE: SpawnTable = [
    (80, create_orc),
    (100, create_troll),
]

ITEM_TABLE: SpawnTable = [
    (70, create_healing_potion),
    (80, create_lightning_scroll),
    (90, create_fireball_scroll),
    (100, create_confuse_scroll),
]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned room; ``(x1, y1)`` inclusive wall corner, ``(x2, y2)`` exclusive."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    def center(self) -> Position:
        return Position((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Rect") -> bool:
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )


def roll_table(table: SpawnTable, rng: random.Random) -> EntitySpec:
    roll = rng.randint(0, 99)
    for bound, factory in table:
        if roll < bound:
            return factory()
    return table[-1][1]()


def carve_room(state: State, room: Rect) -> State:
    """Turn the inside of ``room`` (walls excluded) into floor."""
    for x in range(room.x1 + 1, room.x2):
        for y in range(room.y1 + 1, room.y2):
            state = set_tile(state, Position(x, y), FLOOR)
    return state


def carve_h_tunnel(state: State, x1: int, x2: int, y: int) -> State:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        state = set_tile(state, Position(x, y), FLOOR)
    return state


def carve_v_tunnel(state: State, y1: int, y2: int, x: int) -> State:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        state = set_tile(state, Position(x, y), FLOOR)
    return state


def place_objects(
    state: State, room: Rect, rng: random.Random, config: GameConfig
) -> State:
    """Drop a random number of monsters and items on free tiles of ``room``."""
    for _ in range(rng.randint(0, config.max_room_monsters)):
        pos = Position(rng.randint(room.x1 + 1, room.x2 - 1), rng.randint(room.y1 + 1, room.y2 - 1))
        if not is_blocked_at(state, pos):
            state, _ = spawn(state, roll_table(MONSTER_TABLE, rng), pos)

    for _ in range(rng.randint(0, config.max_room_items)):
        pos = Position(rng.randint(room.x1 + 1, room.x2 - 1), rng.randint(room.y1 + 1, room.y2 - 1))
        if not is_blocked_at(state, pos):
            state, _ = spawn(state, roll_table(ITEM_TABLE, rng), pos)
    return state


def generate_dungeon(state: State, rng: random.Random, config: GameConfig) -> State:
    """Carve a dungeon into ``state`` and populate it.

    The player (``state.player_id``) must already exist; it is moved to the
    centre of the first room.

    Raises:
        ValueError: If the map is too small to hold a single room.
    """
    if config.room_min_size >= min(state.width, state.height):
        raise ValueError(
            f"Map {state.width}x{state.height} is too small for rooms of {config.room_min_size}"
        )

    rooms: List[Rect] = []
    for _ in range(config.max_rooms):
        w = rng.randint(config.room_min_size, config.room_max_size)
        h = rng.randint(config.room_min_size, config.room_max_size)
        x = rng.randint(0, max(0, state.width - w - 1))
        y = rng.randint(0, max(0, state.height - h - 1))
        new_room = Rect.from_size(x, y, min(w, state.width - 1 - x), min(h, state.height - 1 - y))

        if any(new_room.intersects(other) for other in rooms):
            continue

        state = carve_room(state, new_room)
        center = new_room.center()
        if not rooms:
            state = replace(
                state, position=state.position.set(state.player_id, center)
            )
        else:
            prev = rooms[-1].center()
            if rng.random() < 0.5:
                state = carve_h_tunnel(state, prev.x, center.x, prev.y)
                state = carve_v_tunnel(state, prev.y, center.y, center.x)
            else:
                state = carve_v_tunnel(state, prev.y, center.y, prev.x)
                state = carve_h_tunnel(state, prev.x, center.x, center.y)
            state = place_objects(state, new_room, rng, config)
        rooms.append(new_room)

    logger.info("Generated dungeon with %d rooms and %d entities", len(rooms), len(state.entity))
    return state
