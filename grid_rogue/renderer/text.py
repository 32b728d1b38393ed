"""Plain-text renderer.

Composes each frame into a ``(screen_height, screen_width)`` NumPy array of
single characters plus a parallel array of colours, then writes it to a text
stream, optionally with ANSI colour codes.

Layers, bottom to top:

1. Map: walls ``#`` and floors ``.`` inside the field of view, remembered
   (explored) walls and floors outside it drawn dim (``#`` and ``,``).
   Rebuilt only when the ``recompute`` flag is set.
2. Entities in the field of view, in ascending appearance priority, so
   corpses end up under items and items under actors.
3. Panel: HP bar, names under the pointer and the tail of the message log.
"""

from typing import Dict, List, Optional, Sequence, TextIO, Tuple

import numpy as np

from grid_rogue.components import Position
from grid_rogue.config import GameConfig
from grid_rogue.state import State
from grid_rogue.systems.fov import View
from grid_rogue.types import Color


WALL_GLYPH = "#"
FLOOR_GLYPH = "."
REMEMBERED_FLOOR_GLYPH = ","
BAR_WIDTH = 20

DIM = "dim"
LIT_WALL = "lit_wall"

ANSI_CODES: Dict[object, str] = {
    Color.WHITE: "97",
    Color.RED: "91",
    Color.DARK_RED: "31",
    Color.ORANGE: "33",
    Color.YELLOW: "93",
    Color.LIGHT_YELLOW: "93",
    Color.GREEN: "32",
    Color.LIGHT_GREEN: "92",
    Color.DARKER_GREEN: "32",
    Color.DESATURATED_GREEN: "92",
    Color.LIGHT_BLUE: "94",
    Color.LIGHT_CYAN: "96",
    Color.LIGHT_VIOLET: "95",
    Color.VIOLET: "35",
    DIM: "90",
    LIT_WALL: "37",
}

Layer = Tuple[np.ndarray, np.ndarray]


def _blank(height: int, width: int) -> Layer:
    chars = np.full((height, width), " ", dtype="<U1")
    colors = np.full((height, width), None, dtype=object)
    return chars, colors


class TextRenderer:
    """Draw frames as text.

    Attributes:
        stream: Where frames are written.
        config: Screen geometry.
        color: Emit ANSI colour escapes.
    """

    def __init__(self, stream: TextIO, config: GameConfig, color: bool = False) -> None:
        self.stream = stream
        self.config = config
        self.color = color
        self._map_layer: Optional[Layer] = None

    # -------- Renderer protocol --------

    def render(
        self, state: State, view: View, recompute: bool, pointer: Optional[Position]
    ) -> None:
        if recompute or self._map_layer is None or self._map_layer[0].shape != (
            state.height,
            state.width,
        ):
            self._map_layer = self.draw_map(state, view)

        chars, colors = _blank(self.config.screen_height, self.config.screen_width)
        map_chars, map_colors = self._map_layer
        h = min(state.height, chars.shape[0])
        w = min(state.width, chars.shape[1])
        chars[:h, :w] = map_chars[:h, :w]
        colors[:h, :w] = map_colors[:h, :w]

        self.draw_entities(state, view, chars, colors)
        self.draw_panel(state, view, pointer, chars, colors)
        self._write(chars, colors)

    def render_menu(self, header: str, options: Sequence[str]) -> None:
        lines = header.splitlines() if header else []
        for i, option in enumerate(options):
            lines.append(f"({chr(ord('a') + i)}) {option}")
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()

    # -------- Layers --------

    def draw_map(self, state: State, view: View) -> Layer:
        chars, colors = _blank(state.height, state.width)
        for y, row in enumerate(state.tiles):
            for x, tile in enumerate(row):
                visible = bool(view.visible[y, x])
                if not visible and not tile.explored:
                    continue
                if tile.block_sight:
                    chars[y, x] = WALL_GLYPH
                    colors[y, x] = LIT_WALL if visible else DIM
                else:
                    chars[y, x] = FLOOR_GLYPH if visible else REMEMBERED_FLOOR_GLYPH
                    colors[y, x] = Color.WHITE if visible else DIM
        return chars, colors

    def draw_entities(
        self, state: State, view: View, chars: np.ndarray, colors: np.ndarray
    ) -> None:
        drawable = [
            eid
            for eid, pos in state.position.items()
            if eid in state.appearance and view.is_visible(pos)
        ]
        drawable.sort(key=lambda eid: (state.appearance[eid].priority, eid))
        for eid in drawable:
            pos = state.position[eid]
            if pos.y < chars.shape[0] and pos.x < chars.shape[1]:
                appearance = state.appearance[eid]
                chars[pos.y, pos.x] = appearance.glyph
                colors[pos.y, pos.x] = appearance.color

    def draw_panel(
        self,
        state: State,
        view: View,
        pointer: Optional[Position],
        chars: np.ndarray,
        colors: np.ndarray,
    ) -> None:
        panel_y = state.height
        panel_height = chars.shape[0] - panel_y
        if panel_height <= 0:
            return

        fighter = state.fighter.get(state.player_id)
        if fighter is not None:
            self._put(chars, colors, 1, panel_y + 1, self.hp_bar(fighter.hp, fighter.max_hp), Color.RED)

        names = self.names_under_pointer(state, view, pointer)
        if names:
            self._put(chars, colors, 1, panel_y, names, Color.LIGHT_YELLOW)

        msg_x = BAR_WIDTH + 2
        msg_lines = max(0, panel_height - 1)
        tail = list(state.messages)[-msg_lines:] if msg_lines else []
        for i, message in enumerate(tail):
            self._put(chars, colors, msg_x, panel_y + 1 + i, message.text, message.color)

    # -------- Helpers --------

    @staticmethod
    def hp_bar(hp: int, max_hp: int, width: int = BAR_WIDTH) -> str:
        filled = int(float(hp) / max_hp * width) if max_hp > 0 else 0
        text = f"HP: {hp}/{max_hp}"
        bar = list("=" * filled + "-" * (width - filled))
        start = max(0, (width - len(text)) // 2)
        for i, ch in enumerate(text[:width]):
            bar[start + i] = ch
        return "".join(bar)

    @staticmethod
    def names_under_pointer(
        state: State, view: View, pointer: Optional[Position]
    ) -> str:
        """Comma separated names of the visible entities at the pointer tile."""
        if pointer is None or not view.is_visible(pointer):
            return ""
        names: List[str] = [
            state.entity[eid].name
            for eid in sorted(state.position)
            if state.position[eid] == pointer
        ]
        return ", ".join(names).capitalize()

    @staticmethod
    def _put(
        chars: np.ndarray, colors: np.ndarray, x: int, y: int, text: str, color: object
    ) -> None:
        if not 0 <= y < chars.shape[0]:
            return
        for i, ch in enumerate(text):
            if x + i >= chars.shape[1]:
                break
            chars[y, x + i] = ch
            colors[y, x + i] = color

    def _write(self, chars: np.ndarray, colors: np.ndarray) -> None:
        lines: List[str] = []
        for y in range(chars.shape[0]):
            if not self.color:
                lines.append("".join(chars[y]).rstrip())
                continue
            parts: List[str] = []
            for ch, color in zip(chars[y], colors[y]):
                code = ANSI_CODES.get(color)
                parts.append(f"\x1b[{code}m{ch}\x1b[0m" if code and ch != " " else str(ch))
            lines.append("".join(parts).rstrip())
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()
