from dataclasses import replace

import pytest

from grid_rogue.actions import Action, Command, Outcome
from grid_rogue.components import Position
from grid_rogue.levels.factories import create_healing_potion, spawn
from grid_rogue.session.setup import initialize_fov, new_game
from grid_rogue.step import step
from grid_rogue.systems.combat import damage_system
from grid_rogue.systems.fov import compute_view
from grid_rogue.types import AIOrder
from tests.test_utils import (
    assert_entity_positions,
    full_view,
    give_item,
    make_monster,
    make_player_state,
    small_config,
)


def test_move_consumes_turn() -> None:
    state = make_player_state((1, 1))
    new_state, outcome = step(state, Command(Action.RIGHT), full_view(state))
    assert outcome == Outcome.MOVED
    assert new_state.turn == 1
    assert_entity_positions(new_state, {state.player_id: (2, 1)})


def test_blocked_move_does_not_consume_turn() -> None:
    state = make_player_state((1, 1), wall_positions=[(2, 1)])
    state, _ = make_monster(state, (5, 5))
    new_state, outcome = step(state, Command(Action.RIGHT), full_view(state))
    assert outcome == Outcome.NO_TURN
    assert new_state is state


def test_bump_attacks() -> None:
    state = make_player_state((1, 1))
    state, orc_id = make_monster(state, (2, 1))
    new_state, outcome = step(state, Command(Action.RIGHT), full_view(state))
    assert outcome == Outcome.ATTACKED
    assert new_state.fighter[orc_id].hp == 5
    # orc strikes back in the same turn
    assert new_state.fighter[state.player_id].hp == 29
    assert_entity_positions(new_state, {state.player_id: (1, 1)})


def test_bumping_a_corpse_moves_onto_it() -> None:
    state = make_player_state((1, 1))
    state, orc_id = make_monster(state, (2, 1))
    state = damage_system(state, orc_id, 100)
    new_state, outcome = step(state, Command(Action.RIGHT), full_view(state))
    assert outcome == Outcome.MOVED
    assert_entity_positions(new_state, {state.player_id: (2, 1)})


def test_monsters_act_after_player() -> None:
    state = make_player_state((1, 1))
    state, orc_id = make_monster(state, (5, 1))
    new_state, _ = step(state, Command(Action.RIGHT), full_view(state))
    assert_entity_positions(new_state, {state.player_id: (2, 1), orc_id: (4, 1)})


def test_wait_lets_monsters_act() -> None:
    state = make_player_state((1, 1))
    state, orc_id = make_monster(state, (5, 1))
    new_state, outcome = step(state, Command(Action.WAIT), full_view(state))
    assert outcome == Outcome.WAITED
    assert_entity_positions(new_state, {orc_id: (4, 1)})


def test_no_action_and_exit_do_not_advance() -> None:
    state = make_player_state((1, 1))
    state, _ = make_monster(state, (5, 1))
    for action, expected in ((Action.NONE, Outcome.NO_TURN), (Action.EXIT, Outcome.EXIT)):
        new_state, outcome = step(state, Command(action), full_view(state))
        assert outcome == expected
        assert new_state is state


def test_dead_player_cannot_act() -> None:
    state = make_player_state((1, 1))
    state = damage_system(state, state.player_id, 100)
    new_state, outcome = step(state, Command(Action.RIGHT), full_view(state))
    assert outcome == Outcome.NO_TURN
    assert new_state is state
    _, outcome = step(state, Command(Action.EXIT), full_view(state))
    assert outcome == Outcome.EXIT


def test_monsters_stop_once_player_dies() -> None:
    state = make_player_state((1, 1))
    weak = replace(state.fighter[state.player_id], hp=1)
    state = replace(state, fighter=state.fighter.set(state.player_id, weak))
    state, _ = make_monster(state, (2, 1))
    state, second_id = make_monster(state, (5, 1))
    new_state, _ = step(state, Command(Action.WAIT), full_view(state))
    assert new_state.lose
    # the monsters still act within the turn, the later one just walks
    assert_entity_positions(new_state, {second_id: (4, 1)})

    after, outcome = step(new_state, Command(Action.WAIT), full_view(new_state))
    assert outcome == Outcome.NO_TURN
    assert after is new_state


def test_item_commands() -> None:
    state = make_player_state((1, 1))
    state, potion_id = spawn(state, create_healing_potion(), Position(1, 1))
    state, outcome = step(state, Command(Action.PICK_UP), full_view(state))
    assert outcome == Outcome.PICKED_UP_ITEM
    assert state.turn == 1

    state, outcome = step(state, Command(Action.USE_ITEM, item_index=0), full_view(state))
    assert outcome == Outcome.NO_TURN
    assert state.turn == 1

    state, outcome = step(state, Command(Action.DROP_ITEM, item_index=0), full_view(state))
    assert outcome == Outcome.DROPPED_ITEM
    assert state.position[potion_id] == Position(1, 1)
    assert state.turn == 2


def test_pick_up_nothing_does_not_consume_turn() -> None:
    state = make_player_state((1, 1))
    new_state, outcome = step(state, Command(Action.PICK_UP), full_view(state))
    assert outcome == Outcome.NO_TURN
    assert new_state.turn == 0


def test_inventory_command_without_index_is_rejected() -> None:
    state = make_player_state()
    state, _ = give_item(state, create_healing_potion())
    with pytest.raises(ValueError):
        step(state, Command(Action.USE_ITEM), full_view(state))


def _replay(config, commands, order):
    state, view = initialize_fov(new_game(config), config)
    for command in commands:
        view = compute_view(state, config.fov_radius)
        state, _ = step(state, command, view, order)
    return state


@pytest.mark.parametrize("order", list(AIOrder))
def test_replay_is_deterministic(tmp_path, order) -> None:
    config = small_config(tmp_path)
    commands = [Command(a) for a in (Action.RIGHT, Action.DOWN, Action.WAIT, Action.LEFT) * 5]
    assert _replay(config, commands, order) == _replay(config, commands, order)
