"""Item systems: pick up, use and drop.

Item handlers are looked up by :class:`grid_rogue.types.ItemEffect`. A
handler returns the new state and whether the item was actually used; a
cancelled use (full health, no target in range, no aimed tile) leaves the item
in the inventory and does not cost a turn. Used items are consumed: the entity
is removed from every component store.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Optional, Tuple

from grid_rogue.components import AI, Position
from grid_rogue.state import State
from grid_rogue.systems.combat import damage_system, display_name
from grid_rogue.systems.fov import View
from grid_rogue.types import AIBehavior, Color, EntityID, ItemEffect
from grid_rogue.utils.ecs import entities_with_components_at, living_fighters, remove_entity
from grid_rogue.utils.health import apply_heal, is_full_health
from grid_rogue.utils.inventory import add_item, is_full, item_at, remove_item
from grid_rogue.utils.math import distance
from grid_rogue.utils.messages import add_message


logger = logging.getLogger(__name__)

HEAL_AMOUNT = 4
LIGHTNING_DAMAGE = 20
LIGHTNING_RANGE = 5
CONFUSE_RANGE = 8
CONFUSE_NUM_TURNS = 10
FIREBALL_RADIUS = 3
FIREBALL_DAMAGE = 12

UseResult = Tuple[State, bool]
ItemFn = Callable[[State, View, Optional[Position]], UseResult]


def closest_monster(state: State, view: View, max_range: float) -> Optional[EntityID]:
    """Return the closest visible living monster within ``max_range`` of the player."""
    player_pos = state.position[state.player_id]
    closest: Optional[EntityID] = None
    closest_dist = max_range + 1
    for eid in living_fighters(state):
        if eid == state.player_id or not view.is_visible(state.position[eid]):
            continue
        dist = distance(player_pos, state.position[eid])
        if dist < closest_dist:
            closest, closest_dist = eid, dist
    return closest


def cast_heal(state: State, view: View, target: Optional[Position]) -> UseResult:
    player_id = state.player_id
    fighter = state.fighter[player_id]
    if is_full_health(fighter):
        return add_message(state, "You are already at full health.", Color.RED), False
    state = add_message(state, "Your wounds start to feel better!", Color.LIGHT_VIOLET)
    return (
        replace(state, fighter=state.fighter.set(player_id, apply_heal(fighter, HEAL_AMOUNT))),
        True,
    )


def cast_lightning(state: State, view: View, target: Optional[Position]) -> UseResult:
    monster_id = closest_monster(state, view, LIGHTNING_RANGE)
    if monster_id is None:
        return add_message(state, "No enemy is close enough to strike.", Color.RED), False
    state = add_message(
        state,
        f"A lightning bolt strikes the {display_name(state, monster_id)} with a loud "
        f"thunder! The damage is {LIGHTNING_DAMAGE} hit points.",
        Color.LIGHT_BLUE,
    )
    return damage_system(state, monster_id, LIGHTNING_DAMAGE), True


def cast_confuse(state: State, view: View, target: Optional[Position]) -> UseResult:
    monster_id = closest_monster(state, view, CONFUSE_RANGE)
    if monster_id is None or monster_id not in state.ai:
        return add_message(state, "No enemy is close enough to confuse.", Color.RED), False
    old_ai = state.ai[monster_id]
    previous = old_ai.previous if old_ai.behavior == AIBehavior.CONFUSED else old_ai.behavior
    confused = AI(
        behavior=AIBehavior.CONFUSED, previous=previous, turns_left=CONFUSE_NUM_TURNS
    )
    state = replace(state, ai=state.ai.set(monster_id, confused))
    state = add_message(
        state,
        f"The eyes of the {display_name(state, monster_id)} look vacant, "
        "as he starts to stumble around!",
        Color.LIGHT_GREEN,
    )
    return state, True


def cast_fireball(state: State, view: View, target: Optional[Position]) -> UseResult:
    if target is None or not view.is_visible(target):
        return (
            add_message(
                state,
                "Point at a visible tile to aim the fireball.",
                Color.LIGHT_CYAN,
            ),
            False,
        )
    state = add_message(
        state,
        f"The fireball explodes, burning everything within {FIREBALL_RADIUS} tiles!",
        Color.ORANGE,
    )
    for eid in living_fighters(state):
        if distance(state.position[eid], target) <= FIREBALL_RADIUS:
            state = add_message(
                state,
                f"The {display_name(state, eid)} gets burned for "
                f"{FIREBALL_DAMAGE} hit points.",
                Color.ORANGE,
            )
            state = damage_system(state, eid, FIREBALL_DAMAGE)
    return state, True


ITEM_EFFECTS: Dict[ItemEffect, ItemFn] = {
    ItemEffect.HEAL: cast_heal,
    ItemEffect.LIGHTNING: cast_lightning,
    ItemEffect.CONFUSE: cast_confuse,
    ItemEffect.FIREBALL: cast_fireball,
}


def pick_up_system(state: State, entity_id: EntityID) -> Tuple[State, bool]:
    """Move the first item under ``entity_id`` into its inventory.

    Returns:
        Tuple[State, bool]: New state and whether an item was picked up.
    """
    pos = state.position.get(entity_id)
    inventory = state.inventory.get(entity_id)
    if pos is None or inventory is None:
        return state, False

    item_ids = entities_with_components_at(state, pos, state.item)
    if not item_ids:
        return state, False

    item_id = item_ids[0]
    name = display_name(state, item_id)
    if is_full(inventory, state.inventory_capacity):
        return (
            add_message(state, f"Your inventory is full, cannot pick up {name}.", Color.RED),
            False,
        )

    state = replace(
        state,
        inventory=state.inventory.set(entity_id, add_item(inventory, item_id)),
        position=state.position.remove(item_id),
    )
    return add_message(state, f"You picked up a {name}!", Color.GREEN), True


def use_item_system(
    state: State, index: int, view: View, target: Optional[Position] = None
) -> Tuple[State, bool]:
    """Use the player's inventory item at ``index``.

    Raises:
        ValueError: If the slot is empty.
    """
    player_id = state.player_id
    item_id = item_at(state.inventory[player_id], index)
    effect = state.item[item_id].effect
    state, used = ITEM_EFFECTS[effect](state, view, target)
    if used:
        logger.debug("Item %s (%s) consumed", item_id, effect)
        state = replace(
            state,
            inventory=state.inventory.set(
                player_id, remove_item(state.inventory[player_id], item_id)
            ),
        )
        state = remove_entity(state, item_id)
    return state, used


def drop_item_system(state: State, index: int) -> State:
    """Put the player's inventory item at ``index`` on the floor under the player.

    Raises:
        ValueError: If the slot is empty.
    """
    player_id = state.player_id
    inventory = state.inventory[player_id]
    item_id = item_at(inventory, index)
    state = replace(
        state,
        inventory=state.inventory.set(player_id, remove_item(inventory, item_id)),
        position=state.position.set(item_id, state.position[player_id]),
    )
    return add_message(
        state, f"You dropped a {display_name(state, item_id)}.", Color.YELLOW
    )
