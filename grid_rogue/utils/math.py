"""Distance and line helpers used by targeting, monster movement and FOV."""

from math import sqrt
from typing import List, Tuple

from grid_rogue.components import Position


def distance(a: Position, b: Position) -> float:
    """Return the Euclidean distance between two tiles."""
    return sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)


def step_towards(origin: Position, target: Position) -> Tuple[int, int]:
    """Return a unit ``(dx, dy)`` step from ``origin`` in the direction of ``target``.

    The normalized vector is rounded, so diagonal steps happen whenever both
    axes are roughly equally far off.
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    dist = sqrt(dx**2 + dy**2)
    if dist == 0:
        return 0, 0
    return int(round(dx / dist)), int(round(dy / dist))


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Tuple[int, int]]:
    """Return the cells on the line from ``(x0, y0)`` to ``(x1, y1)`` inclusive."""
    points: List[Tuple[int, int]] = []
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy
    return points
