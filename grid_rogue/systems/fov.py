"""Field-of-view system.

The :class:`View` is derived data: a visibility mask computed from the map and
the player's position. It is never stored on :class:`State` and never saved;
the session recomputes it whenever a map is set up or loaded and whenever the
player moves. ``explore_system`` folds the mask back into the state by
marking visible tiles as explored (which *is* persisted).
"""

from dataclasses import dataclass, replace

import numpy as np

from grid_rogue.components import Position
from grid_rogue.state import State
from grid_rogue.utils.fov import compute_fov, transparency_mask


FOV_RADIUS = 10
FOV_LIGHT_WALLS = True


@dataclass(frozen=True, eq=False)
class View:
    """Visibility snapshot for one player position.

    Attributes:
        visible: ``(height, width)`` boolean mask indexed ``[y, x]``.
        origin: Player position the mask was computed from.
    """

    visible: np.ndarray
    origin: Position

    def is_visible(self, pos: Position) -> bool:
        height, width = self.visible.shape
        if not (0 <= pos.x < width and 0 <= pos.y < height):
            return False
        return bool(self.visible[pos.y, pos.x])


def compute_view(
    state: State, radius: int = FOV_RADIUS, light_walls: bool = FOV_LIGHT_WALLS
) -> View:
    """Compute the player's view for ``state``."""
    origin = state.position[state.player_id]
    visible = compute_fov(transparency_mask(state), origin, radius, light_walls)
    return View(visible=visible, origin=origin)


def empty_view(state: State) -> View:
    """A view where nothing is visible (before the first FOV computation)."""
    return View(
        visible=np.zeros((state.height, state.width), dtype=bool),
        origin=Position(-1, -1),
    )


def explore_system(state: State, view: View) -> State:
    """Mark every visible tile as explored.

    Rows without newly seen tiles are shared with the previous state.
    """
    tiles = state.tiles
    for y, row in enumerate(state.tiles):
        xs = np.flatnonzero(view.visible[y])
        if len(xs) == 0:
            continue
        new_row = row
        for x in xs:
            tile = row[int(x)]
            if not tile.explored:
                new_row = new_row.set(int(x), replace(tile, explored=True))
        if new_row is not row:
            tiles = tiles.set(y, new_row)
    if tiles is state.tiles:
        return state
    return replace(state, tiles=tiles)
