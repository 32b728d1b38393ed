from grid_rogue.components import Position
from grid_rogue.levels.factories import create_healing_potion, spawn
from grid_rogue.systems.combat import damage_system
from grid_rogue.utils.grid import is_blocked_at, is_in_bounds
from tests.test_utils import make_monster, make_player_state


def test_walls_and_edges_block() -> None:
    state = make_player_state((1, 1), wall_positions=[(4, 4)])
    assert is_blocked_at(state, Position(4, 4))
    assert is_blocked_at(state, Position(-1, 0))
    assert is_blocked_at(state, Position(0, 10))
    assert not is_in_bounds(state, Position(10, 0))
    assert not is_blocked_at(state, Position(5, 5))


def test_only_blocking_entities_block() -> None:
    state = make_player_state((1, 1))
    state, orc_id = make_monster(state, (3, 3))
    state, _ = spawn(state, create_healing_potion(), Position(6, 6))
    assert is_blocked_at(state, Position(1, 1))
    assert is_blocked_at(state, Position(3, 3))
    assert not is_blocked_at(state, Position(6, 6))

    state = damage_system(state, orc_id, 100)
    assert not is_blocked_at(state, Position(3, 3))
