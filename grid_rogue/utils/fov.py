"""Field-of-view computation.

Basic ray casting: a Bresenham ray is traced from the origin to every cell on
the border of the square of side ``2 * radius + 1``; a ray stops at the
first cell that blocks sight. With ``light_walls`` the blocking cell itself is
lit, which is what makes room walls visible. Cells farther than ``radius``
are discarded so the lit area is round.

Results are numpy boolean masks indexed ``[y, x]``.
"""

import numpy as np

from grid_rogue.components import Position
from grid_rogue.state import State
from grid_rogue.utils.math import bresenham_line


def transparency_mask(state: State) -> np.ndarray:
    """Return a ``(height, width)`` mask that is True where light passes."""
    return np.array(
        [[not tile.block_sight for tile in row] for row in state.tiles],
        dtype=bool,
    ).reshape(state.height, state.width)


def compute_fov(
    transparent: np.ndarray, origin: Position, radius: int, light_walls: bool = True
) -> np.ndarray:
    """Return the mask of cells visible from ``origin``.

    Arguments:
        transparent: ``(height, width)`` mask from :func:`transparency_mask`.
        origin: Viewer position (always visible).
        radius: Maximum sight distance; ``0`` means unlimited.
        light_walls: Light the first opaque cell a ray hits.
    """
    height, width = transparent.shape
    visible = np.zeros((height, width), dtype=bool)
    if not (0 <= origin.x < width and 0 <= origin.y < height):
        return visible
    visible[origin.y, origin.x] = True

    reach = radius if radius > 0 else max(width, height)
    x_min, x_max = origin.x - reach, origin.x + reach
    y_min, y_max = origin.y - reach, origin.y + reach
    border = (
        [(x, y_min) for x in range(x_min, x_max + 1)]
        + [(x, y_max) for x in range(x_min, x_max + 1)]
        + [(x_min, y) for y in range(y_min + 1, y_max)]
        + [(x_max, y) for y in range(y_min + 1, y_max)]
    )
    for tx, ty in border:
        for x, y in bresenham_line(origin.x, origin.y, tx, ty)[1:]:
            if not (0 <= x < width and 0 <= y < height):
                break
            if transparent[y, x]:
                visible[y, x] = True
            else:
                if light_walls:
                    visible[y, x] = True
                break

    if radius > 0:
        ys, xs = np.ogrid[:height, :width]
        within = (xs - origin.x) ** 2 + (ys - origin.y) ** 2 <= radius**2
        visible &= within
    return visible
