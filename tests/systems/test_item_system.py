from dataclasses import replace

import pytest
from pyrsistent import pvector

from grid_rogue.components import AI, Position
from grid_rogue.levels.factories import (
    create_confuse_scroll,
    create_fireball_scroll,
    create_healing_potion,
    create_lightning_scroll,
    spawn,
)
from grid_rogue.systems.fov import empty_view
from grid_rogue.systems.items import (
    CONFUSE_NUM_TURNS,
    drop_item_system,
    pick_up_system,
    use_item_system,
)
from grid_rogue.types import AIBehavior
from tests.test_utils import full_view, give_item, make_monster, make_player_state


def _hurt_player(state, hp: int):
    fighter = replace(state.fighter[state.player_id], hp=hp)
    return replace(state, fighter=state.fighter.set(state.player_id, fighter))


def test_pick_up_moves_item_into_inventory() -> None:
    state = make_player_state((1, 1))
    state, potion_id = spawn(state, create_healing_potion(), Position(1, 1))
    new_state, picked = pick_up_system(state, state.player_id)
    assert picked
    assert list(new_state.inventory[state.player_id].item_ids) == [potion_id]
    assert potion_id not in new_state.position
    assert new_state.messages[-1].text == "You picked up a healing potion!"


def test_pick_up_with_nothing_underfoot() -> None:
    state = make_player_state((1, 1))
    state, _ = spawn(state, create_healing_potion(), Position(2, 1))
    new_state, picked = pick_up_system(state, state.player_id)
    assert not picked
    assert new_state is state


def test_pick_up_with_full_inventory() -> None:
    state = replace(make_player_state((1, 1)), inventory_capacity=1)
    state, _ = give_item(state, create_healing_potion())
    state, scroll_id = spawn(state, create_lightning_scroll(), Position(1, 1))
    new_state, picked = pick_up_system(state, state.player_id)
    assert not picked
    assert scroll_id in new_state.position
    assert len(new_state.inventory[state.player_id].item_ids) == 1
    text = " ".join(m.text for m in new_state.messages[-2:])
    assert text == "Your inventory is full, cannot pick up scroll of lightning bolt."


def test_inventory_keeps_pick_up_order() -> None:
    state = make_player_state((1, 1))
    state, first = spawn(state, create_lightning_scroll(), Position(1, 1))
    state, _ = pick_up_system(state, state.player_id)
    state, second = spawn(state, create_healing_potion(), Position(1, 1))
    state, _ = pick_up_system(state, state.player_id)
    assert state.inventory[state.player_id].item_ids == pvector([first, second])


def test_heal_refused_at_full_health() -> None:
    state = make_player_state()
    state, potion_id = give_item(state, create_healing_potion())
    new_state, used = use_item_system(state, 0, full_view(state))
    assert not used
    assert potion_id in new_state.inventory[state.player_id].item_ids
    assert new_state.messages[-1].text == "You are already at full health."


def test_heal_restores_hp_and_consumes_potion() -> None:
    state = _hurt_player(make_player_state(), 20)
    state, potion_id = give_item(state, create_healing_potion())
    new_state, used = use_item_system(state, 0, full_view(state))
    assert used
    assert new_state.fighter[state.player_id].hp == 24
    assert len(new_state.inventory[state.player_id].item_ids) == 0
    assert potion_id not in new_state.entity
    assert potion_id not in new_state.item


def test_heal_is_capped_at_max_hp() -> None:
    state = _hurt_player(make_player_state(), 29)
    state, _ = give_item(state, create_healing_potion())
    new_state, _ = use_item_system(state, 0, full_view(state))
    assert new_state.fighter[state.player_id].hp == 30


def test_lightning_strikes_closest_visible_monster() -> None:
    state = make_player_state((1, 1))
    state, far_id = make_monster(state, (5, 1))
    state, near_id = make_monster(state, (3, 1))
    state, _ = give_item(state, create_lightning_scroll())
    new_state, used = use_item_system(state, 0, full_view(state))
    assert used
    assert near_id in new_state.dead
    assert far_id not in new_state.dead


def test_lightning_without_target_is_cancelled() -> None:
    state = make_player_state((1, 1))
    state, _ = make_monster(state, (3, 1))
    state, scroll_id = give_item(state, create_lightning_scroll())
    new_state, used = use_item_system(state, 0, empty_view(state))
    assert not used
    assert scroll_id in new_state.inventory[state.player_id].item_ids
    assert new_state.messages[-1].text == "No enemy is close enough to strike."


def test_lightning_out_of_range() -> None:
    state = make_player_state((1, 1), width=12)
    state, _ = make_monster(state, (8, 1))
    state, _ = give_item(state, create_lightning_scroll())
    _, used = use_item_system(state, 0, full_view(state))
    assert not used


def test_confuse_replaces_ai_temporarily() -> None:
    state = make_player_state((1, 1))
    state, orc_id = make_monster(state, (4, 4))
    state, _ = give_item(state, create_confuse_scroll())
    new_state, used = use_item_system(state, 0, full_view(state))
    assert used
    assert new_state.ai[orc_id] == AI(
        behavior=AIBehavior.CONFUSED,
        previous=AIBehavior.BASIC,
        turns_left=CONFUSE_NUM_TURNS,
    )


def test_fireball_needs_visible_target() -> None:
    state = make_player_state((1, 1))
    state, _ = give_item(state, create_fireball_scroll())
    _, used = use_item_system(state, 0, full_view(state), target=None)
    assert not used
    _, used = use_item_system(state, 0, empty_view(state), target=Position(5, 5))
    assert not used


def test_fireball_burns_everything_in_radius() -> None:
    state = make_player_state((1, 1))
    state, hit_id = make_monster(state, (7, 1))
    state, missed_id = make_monster(state, (7, 8))
    state, _ = give_item(state, create_fireball_scroll())
    new_state, used = use_item_system(state, 0, full_view(state), target=Position(6, 1))
    assert used
    assert hit_id in new_state.dead
    assert missed_id not in new_state.dead
    assert new_state.fighter[state.player_id].hp == 30


def test_fireball_can_burn_the_player() -> None:
    state = make_player_state((1, 1))
    state, _ = give_item(state, create_fireball_scroll())
    new_state, _ = use_item_system(state, 0, full_view(state), target=Position(2, 2))
    assert new_state.fighter[state.player_id].hp == 30 - 12


def test_drop_puts_item_under_player() -> None:
    state = make_player_state((3, 4))
    state, potion_id = give_item(state, create_healing_potion())
    new_state = drop_item_system(state, 0)
    assert new_state.position[potion_id] == Position(3, 4)
    assert len(new_state.inventory[state.player_id].item_ids) == 0
    assert new_state.messages[-1].text == "You dropped a healing potion."


def test_empty_slot_raises() -> None:
    state = make_player_state()
    with pytest.raises(ValueError):
        use_item_system(state, 0, full_view(state))
    with pytest.raises(ValueError):
        drop_item_system(state, 3)
