"""Grid math / collision helpers.

Utility predicates used by movement and map generation. Functions here are
pure and intentionally lightweight to keep inner loops fast.
"""

from dataclasses import replace

from grid_rogue.components import Position
from grid_rogue.state import State, Tile
from grid_rogue.utils.ecs import entities_with_components_at


def is_in_bounds(state: State, pos: Position) -> bool:
    """Return True if ``pos`` lies within the map rectangle."""
    return 0 <= pos.x < state.width and 0 <= pos.y < state.height


def tile_at(state: State, pos: Position) -> Tile:
    return state.tiles[pos.y][pos.x]


def is_blocked_at(state: State, pos: Position) -> bool:
    """Return True if the tile is a wall or a blocking entity stands on it.

    Out-of-bounds positions count as blocked.
    """
    if not is_in_bounds(state, pos):
        return True
    if tile_at(state, pos).blocked:
        return True
    return bool(entities_with_components_at(state, pos, state.blocking))


def set_tile(state: State, pos: Position, tile: Tile) -> State:
    """Return a new state with the tile at ``pos`` replaced."""
    row = state.tiles[pos.y].set(pos.x, tile)
    return replace(state, tiles=state.tiles.set(pos.y, row))
