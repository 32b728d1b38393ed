"""Rendering subpackage.

Defines the :class:`Renderer` protocol the session draws through and ships
:class:`grid_rogue.renderer.text.TextRenderer`, which composes the screen
into a NumPy character buffer and writes it to a text stream.

A renderer receives the state, the current :class:`View` and a
``recompute`` flag that is True whenever the player moved (or a map was just
loaded) since the previous frame; static layers may be cached while it is
False.
"""

from typing import Optional, Protocol, Sequence

from grid_rogue.components import Position
from grid_rogue.state import State
from grid_rogue.systems.fov import View


class Renderer(Protocol):
    def render(
        self, state: State, view: View, recompute: bool, pointer: Optional[Position]
    ) -> None: ...

    def render_menu(self, header: str, options: Sequence[str]) -> None: ...


__all__ = ["Renderer"]
