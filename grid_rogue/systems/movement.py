"""Movement system.

Moves an entity by one step when the destination is inside the map, not a
wall and not occupied by a blocking entity. Returns the original ``State``
when the move is not possible, so callers can compare by identity.
"""

from dataclasses import replace

from grid_rogue.components import Position
from grid_rogue.state import State
from grid_rogue.types import EntityID
from grid_rogue.utils.grid import is_blocked_at
from grid_rogue.utils.math import step_towards


def movement_system(state: State, entity_id: EntityID, dx: int, dy: int) -> State:
    """Move ``entity_id`` by ``(dx, dy)`` if allowed.

    Args:
        state (State): Current state.
        entity_id (EntityID): Entity to move.
        dx (int): Horizontal offset.
        dy (int): Vertical offset.

    Returns:
        State: Same state if blocked / invalid or updated with new position.
    """
    pos = state.position.get(entity_id)
    if pos is None or (dx == 0 and dy == 0):
        return state

    next_pos = Position(pos.x + dx, pos.y + dy)
    if is_blocked_at(state, next_pos):
        return state

    return replace(state, position=state.position.set(entity_id, next_pos))


def move_towards_system(state: State, entity_id: EntityID, target: Position) -> State:
    """Take one step from ``entity_id``'s position in the direction of ``target``."""
    pos = state.position.get(entity_id)
    if pos is None:
        return state
    dx, dy = step_towards(pos, target)
    return movement_system(state, entity_id, dx, dy)
