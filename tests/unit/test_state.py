from dataclasses import replace

import pytest
from pyrsistent import pvector

from grid_rogue.components import Inventory, Position
from grid_rogue.entity import PLAYER_ID, entity_ids_in_order, next_entity_id
from grid_rogue.levels.factories import create_healing_potion, spawn
from grid_rogue.state import InvalidStateError, create_empty_state, validate_state
from grid_rogue.systems.combat import damage_system
from tests.test_utils import give_item, make_monster, make_player_state


def test_valid_state_passes() -> None:
    state = make_player_state()
    assert validate_state(state) is state


def test_ids_come_from_the_state() -> None:
    assert next_entity_id(create_empty_state(4, 4)) == PLAYER_ID
    state = make_player_state()
    state, first = make_monster(state, (3, 3))
    state, second = make_monster(state, (4, 4))
    assert (first, second) == (1, 2)
    assert entity_ids_in_order(state) == [0, 1, 2]
    # a different session starts over
    assert next_entity_id(make_player_state()) == 1


def test_missing_player() -> None:
    with pytest.raises(InvalidStateError):
        validate_state(create_empty_state(4, 4))


def test_dead_player_only_allowed_when_asked() -> None:
    state = damage_system(make_player_state(), PLAYER_ID, 100)
    with pytest.raises(InvalidStateError):
        validate_state(state)
    assert validate_state(state, require_live_player=False) is state


def test_grid_must_match_size() -> None:
    state = make_player_state()
    with pytest.raises(InvalidStateError):
        validate_state(replace(state, width=11))
    with pytest.raises(InvalidStateError):
        validate_state(replace(state, tiles=state.tiles[:-1]))


def test_inventory_capacity() -> None:
    state = replace(make_player_state(), inventory_capacity=1)
    state, _ = give_item(state, create_healing_potion())
    validate_state(state)
    state, _ = give_item(state, create_healing_potion())
    with pytest.raises(InvalidStateError):
        validate_state(state)


def test_carried_item_must_not_be_on_map() -> None:
    state = make_player_state()
    state, potion_id = spawn(state, create_healing_potion(), Position(2, 2))
    inventory = Inventory(pvector([potion_id]))
    state = replace(state, inventory=state.inventory.set(PLAYER_ID, inventory))
    with pytest.raises(InvalidStateError):
        validate_state(state)


def test_component_of_unknown_entity() -> None:
    state = make_player_state()
    state = replace(state, position=state.position.set(99, Position(0, 0)))
    with pytest.raises(InvalidStateError):
        validate_state(state)


def test_inventory_ids_are_unique() -> None:
    state, potion_id = give_item(make_player_state(), create_healing_potion())
    inventory = Inventory(pvector([potion_id, potion_id]))
    state = replace(state, inventory=state.inventory.set(PLAYER_ID, inventory))
    with pytest.raises(InvalidStateError):
        validate_state(state)


def test_monster_ai_needs_fighter_and_position() -> None:
    state, orc_id = make_monster(make_player_state(), (3, 3))
    validate_state(state)
    with pytest.raises(InvalidStateError):
        validate_state(replace(state, fighter=state.fighter.discard(orc_id)))
    with pytest.raises(InvalidStateError):
        validate_state(replace(state, position=state.position.discard(orc_id)))


def test_dead_monster_has_no_ai() -> None:
    state, orc_id = make_monster(make_player_state(), (3, 3))
    killed = damage_system(state, orc_id, 100)
    validate_state(killed)
    with pytest.raises(InvalidStateError):
        validate_state(replace(killed, ai=killed.ai.set(orc_id, state.ai[orc_id])))


@pytest.mark.parametrize("pos", [(10, 0), (0, 10), (-1, 3)])
def test_positions_inside_the_map(pos) -> None:
    state, orc_id = make_monster(make_player_state(), (3, 3))
    state = replace(state, position=state.position.set(orc_id, Position(*pos)))
    with pytest.raises(InvalidStateError):
        validate_state(state)


@pytest.mark.parametrize("hp", [-1, 11])
def test_hit_points_within_maximum(hp: int) -> None:
    state, orc_id = make_monster(make_player_state(), (3, 3))
    fighter = replace(state.fighter[orc_id], hp=hp)
    state = replace(state, fighter=state.fighter.set(orc_id, fighter))
    with pytest.raises(InvalidStateError):
        validate_state(state)


def test_invalid_state_is_a_value_error() -> None:
    assert issubclass(InvalidStateError, ValueError)


def test_description_skips_empty_stores() -> None:
    description = make_player_state().description
    assert "position" in description
    assert "ai" not in description
    assert "tiles" not in description
