"""Monster AI system.

Every entity carrying an :class:`grid_rogue.components.AI` record acts exactly
once per player turn. Monsters act one after another against the state as
already changed by the monsters before them, so a monster that dies mid-turn
does not act and a later monster sees the earlier one's new position.

Behaviours are dispatched on :class:`grid_rogue.types.AIBehavior`:

* ``BASIC``: when the monster stands in the player's field of view it walks
  toward the player, and attacks once adjacent.
* ``CONFUSED``: stumbles in a random direction for ``turns_left`` turns, then
  returns to its previous behaviour.

Randomness comes from a generator seeded by ``(state.seed, state.turn,
entity_id)``, so replaying the same commands from the same state gives the
same result.
"""

import logging
import random
from dataclasses import replace
from typing import Callable, Dict, List

from grid_rogue.components import AI
from grid_rogue.state import State
from grid_rogue.systems.combat import attack_system, display_name
from grid_rogue.systems.fov import View
from grid_rogue.systems.movement import move_towards_system, movement_system
from grid_rogue.types import AIBehavior, AIOrder, Color, EntityID
from grid_rogue.utils.math import distance
from grid_rogue.utils.messages import add_message


logger = logging.getLogger(__name__)

AIFn = Callable[[State, EntityID, View, random.Random], State]


def entity_rng(state: State, entity_id: EntityID) -> random.Random:
    """Deterministic per-entity, per-turn random generator."""
    return random.Random(f"{state.seed}:{state.turn}:{entity_id}")


def basic_ai(state: State, entity_id: EntityID, view: View, rng: random.Random) -> State:
    monster_pos = state.position[entity_id]
    if not view.is_visible(monster_pos):
        return state

    player_id = state.player_id
    player_pos = state.position[player_id]
    if distance(monster_pos, player_pos) >= 2:
        return move_towards_system(state, entity_id, player_pos)
    if player_id not in state.dead and player_id in state.fighter:
        return attack_system(state, entity_id, player_id)
    return state


def confused_ai(
    state: State, entity_id: EntityID, view: View, rng: random.Random
) -> State:
    ai = state.ai[entity_id]
    if ai.turns_left > 0:
        state = movement_system(state, entity_id, rng.randint(-1, 1), rng.randint(-1, 1))
        return replace(
            state, ai=state.ai.set(entity_id, replace(ai, turns_left=ai.turns_left - 1))
        )

    restored = AI(behavior=ai.previous or AIBehavior.BASIC)
    state = replace(state, ai=state.ai.set(entity_id, restored))
    return add_message(
        state,
        f"The {display_name(state, entity_id)} is no longer confused!",
        Color.RED,
    )


AI_BEHAVIORS: Dict[AIBehavior, AIFn] = {
    AIBehavior.BASIC: basic_ai,
    AIBehavior.CONFUSED: confused_ai,
}


def ai_turn_order(state: State, order: AIOrder = AIOrder.SEQUENCE) -> List[EntityID]:
    """Return the ids of AI entities in the order they should act."""
    ids = sorted(state.ai.keys())
    if order == AIOrder.NEAREST_FIRST:
        player_pos = state.position[state.player_id]
        ids.sort(
            key=lambda eid: (
                distance(state.position[eid], player_pos)
                if eid in state.position
                else float("inf"),
                eid,
            )
        )
    return ids


def ai_system(state: State, view: View, order: AIOrder = AIOrder.SEQUENCE) -> State:
    """Give every AI entity one action.

    Args:
        state (State): State after the player's action.
        view (View): The player's field of view for this frame.
        order (AIOrder): Turn order policy.

    Returns:
        State: State after every monster has acted.
    """
    for entity_id in ai_turn_order(state, order):
        # Earlier monsters (or their deaths) can change who still acts.
        ai = state.ai.get(entity_id)
        if ai is None or entity_id in state.dead or entity_id not in state.position:
            continue
        state = AI_BEHAVIORS[ai.behavior](state, entity_id, view, entity_rng(state, entity_id))
    return state
