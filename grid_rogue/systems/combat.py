"""Combat system.

Resolves attacks and damage, and runs the death behaviour of any fighter whose
hit points reach zero. Death behaviours are looked up by their
:class:`grid_rogue.types.DeathBehavior` tag:

* ``PLAYER``: the player turns into a corpse glyph and ``State.lose`` is set.
* ``MONSTER``: the monster becomes "remains of <name>", stops blocking, loses
  its ``Fighter`` and ``AI`` records and is drawn below everything else. The
  entity itself stays in the registry so ids remain stable.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict

from grid_rogue.components import CORPSE_PRIORITY, Appearance, Dead
from grid_rogue.entity import Entity
from grid_rogue.state import State
from grid_rogue.types import Color, DeathBehavior, EntityID
from grid_rogue.utils.health import apply_damage
from grid_rogue.utils.messages import add_message


logger = logging.getLogger(__name__)

DeathFn = Callable[[State, EntityID], State]


def display_name(state: State, entity_id: EntityID) -> str:
    return state.entity[entity_id].name


def attack_system(state: State, attacker_id: EntityID, target_id: EntityID) -> State:
    """Let ``attacker_id`` hit ``target_id`` once.

    Damage is the attacker's power minus the target's defense; non-positive
    damage only produces a message.
    """
    attacker = state.fighter[attacker_id]
    target = state.fighter[target_id]
    damage = attacker.power - target.defense
    attacker_name = display_name(state, attacker_id).capitalize()
    target_name = display_name(state, target_id)

    if damage > 0:
        state = add_message(
            state, f"{attacker_name} attacks {target_name} for {damage} hit points."
        )
        return damage_system(state, target_id, damage)

    return add_message(
        state, f"{attacker_name} attacks {target_name} but it has no effect!"
    )


def damage_system(state: State, target_id: EntityID, amount: int) -> State:
    """Apply ``amount`` damage to ``target_id`` and run its death behaviour at zero hp."""
    fighter = state.fighter.get(target_id)
    if fighter is None or target_id in state.dead:
        return state

    fighter = apply_damage(fighter, amount)
    state = replace(state, fighter=state.fighter.set(target_id, fighter))
    if fighter.hp <= 0:
        logger.debug("Entity %s died (%s)", target_id, fighter.on_death)
        state = DEATH_BEHAVIORS[fighter.on_death](state, target_id)
    return state


def player_death(state: State, entity_id: EntityID) -> State:
    state = add_message(state, "You died!", Color.RED)
    appearance = state.appearance[entity_id]
    return replace(
        state,
        appearance=state.appearance.set(
            entity_id, replace(appearance, glyph="%", color=Color.DARK_RED)
        ),
        dead=state.dead.set(entity_id, Dead()),
        lose=True,
    )


def monster_death(state: State, entity_id: EntityID) -> State:
    name = display_name(state, entity_id)
    state = add_message(state, f"{name.capitalize()} is dead!", Color.ORANGE)
    return replace(
        state,
        entity=state.entity.set(entity_id, Entity(name=f"remains of {name}")),
        appearance=state.appearance.set(
            entity_id,
            Appearance(glyph="%", color=Color.DARK_RED, priority=CORPSE_PRIORITY),
        ),
        blocking=state.blocking.discard(entity_id),
        fighter=state.fighter.discard(entity_id),
        ai=state.ai.discard(entity_id),
        dead=state.dead.set(entity_id, Dead()),
    )


DEATH_BEHAVIORS: Dict[DeathBehavior, DeathFn] = {
    DeathBehavior.PLAYER: player_death,
    DeathBehavior.MONSTER: monster_death,
}
