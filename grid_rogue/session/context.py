"""Session context.

Everything a session needs from the outside world travels in one
:class:`GameContext` passed explicitly to the controller and the turn loop:
configuration, the renderer, the input source and the save store. Nothing in
the session reaches for module-level globals.
"""

from dataclasses import dataclass
from typing import Optional

from grid_rogue.components import Position
from grid_rogue.config import GameConfig
from grid_rogue.input import InputSource
from grid_rogue.persistence import SaveStore
from grid_rogue.renderer import Renderer


@dataclass
class GameContext:
    """Collaborators and mutable per-process UI state.

    Attributes:
        config: Session settings.
        renderer: Where frames and menus are drawn.
        input: Where key and pointer events come from.
        store: Save slot.
        pointer: Latest known pointer tile (kept across polls).
    """

    config: GameConfig
    renderer: Renderer
    input: InputSource
    store: SaveStore
    pointer: Optional[Position] = None
