"""Game configuration.

:class:`GameConfig` gathers every tunable of a session: screen and map sizes,
dungeon generation limits, field of view, inventory capacity, where the save
file lives, the RNG seed, the monster turn order and the key map. It is a
frozen dataclass; derive variants with :func:`dataclasses.replace` (the CLI
does exactly that from its flags).
"""

from dataclasses import dataclass, field
from typing import Optional

from pyrsistent import PMap, pmap

from grid_rogue.actions import Action
from grid_rogue.types import AIOrder


DEFAULT_KEYMAP: PMap[str, Action] = pmap(
    {
        "up": Action.UP,
        "down": Action.DOWN,
        "left": Action.LEFT,
        "right": Action.RIGHT,
        "k": Action.UP,
        "j": Action.DOWN,
        "h": Action.LEFT,
        "l": Action.RIGHT,
        "y": Action.UP_LEFT,
        "u": Action.UP_RIGHT,
        "b": Action.DOWN_LEFT,
        "n": Action.DOWN_RIGHT,
        ".": Action.WAIT,
        "g": Action.PICK_UP,
        "i": Action.USE_ITEM,
        "d": Action.DROP_ITEM,
        "escape": Action.EXIT,
    }
)


@dataclass(frozen=True)
class GameConfig:
    """Session settings.

    Attributes:
        screen_width: Width of the whole screen in characters.
        screen_height: Height of the whole screen in characters.
        map_width: Dungeon width in tiles.
        map_height: Dungeon height in tiles.
        room_min_size: Smallest room side.
        room_max_size: Largest room side.
        max_rooms: Room placement attempts per level.
        max_room_monsters: Upper bound of monsters per room.
        max_room_items: Upper bound of items per room.
        fov_radius: Sight radius; ``0`` is unlimited.
        fov_light_walls: Light the walls that stop sight.
        inventory_capacity: Maximum carried items.
        save_path: Save file location.
        seed: Dungeon / AI seed; ``None`` draws a fresh one per new game.
        ai_order: Monster turn order.
        keymap: Input key name to action.
    """

    screen_width: int = 80
    screen_height: int = 50
    map_width: int = 80
    map_height: int = 43
    room_min_size: int = 6
    room_max_size: int = 10
    max_rooms: int = 30
    max_room_monsters: int = 3
    max_room_items: int = 2
    fov_radius: int = 10
    fov_light_walls: bool = True
    inventory_capacity: int = 26
    save_path: str = "savegame.json"
    seed: Optional[int] = None
    ai_order: AIOrder = AIOrder.SEQUENCE
    keymap: PMap[str, Action] = field(default_factory=lambda: DEFAULT_KEYMAP)

    @property
    def panel_height(self) -> int:
        """Rows below the map used for the status bar and messages."""
        return max(0, self.screen_height - self.map_height)
