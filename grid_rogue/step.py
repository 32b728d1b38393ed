"""State reducer and step orchestration.

This module wires together all systems in the correct order to implement a
single *turn* transition given a :class:`grid_rogue.actions.Command`. The
exported :func:`step` is the only public entry point for gameplay progression
and is pure: it returns a *new* :class:`grid_rogue.state.State` together with
the :class:`grid_rogue.actions.Outcome` of the player's command.

Ordering:

1. The player's command is resolved (move or attack, pick up, use, drop).
2. If the command consumed a turn and the player is still alive, every AI
    entity acts once, in the configured order, each seeing the effects of the
    ones before it.
3. The turn counter is bumped.

``EXIT`` and commands that do not consume a turn (no key, a cancelled menu, a
blocked move, a cancelled item) return before any monster acts.
"""

from dataclasses import replace
from typing import Tuple

from grid_rogue.actions import (
    MOVE_ACTIONS,
    MOVE_DELTAS,
    TURN_OUTCOMES,
    Action,
    Command,
    Outcome,
)
from grid_rogue.components import Position
from grid_rogue.state import State
from grid_rogue.systems.ai import ai_system
from grid_rogue.systems.combat import attack_system
from grid_rogue.systems.fov import View
from grid_rogue.systems.items import drop_item_system, pick_up_system, use_item_system
from grid_rogue.systems.movement import movement_system
from grid_rogue.types import AIOrder
from grid_rogue.utils.ecs import entities_with_components_at


StepResult = Tuple[State, Outcome]


def step(
    state: State,
    command: Command,
    view: View,
    ai_order: AIOrder = AIOrder.SEQUENCE,
) -> StepResult:
    """Advance the game by one player command.

    Args:
        state (State): Previous immutable world state.
        command (Command): Player command to resolve.
        view (View): Player field of view for the current frame; monsters
            only notice the player when they stand inside it.
        ai_order (AIOrder): Order in which monsters act.

    Returns:
        StepResult: Next state and the outcome of the player's command.

    Raises:
        ValueError: If the state has no player or an inventory command names
            an empty slot.
    """
    state, outcome = resolve_player_action(state, command, view)
    if outcome not in TURN_OUTCOMES:
        return state, outcome

    if not state.lose:
        state = ai_system(state, view, ai_order)
    return replace(state, turn=state.turn + 1), outcome


def resolve_player_action(state: State, command: Command, view: View) -> StepResult:
    """Apply ``command`` for the player without letting monsters act."""
    player_id = state.player_id
    if player_id not in state.position:
        raise ValueError("State contains no player")

    action = command.action
    if action == Action.EXIT:
        return state, Outcome.EXIT
    if state.lose or action == Action.NONE:
        return state, Outcome.NO_TURN

    if action in MOVE_ACTIONS:
        return _step_move_or_attack(state, action)
    elif action == Action.WAIT:
        return state, Outcome.WAITED
    elif action == Action.PICK_UP:
        state, picked = pick_up_system(state, player_id)
        return state, Outcome.PICKED_UP_ITEM if picked else Outcome.NO_TURN
    elif action == Action.USE_ITEM:
        state, used = use_item_system(
            state, _require_index(command), view, command.target
        )
        return state, Outcome.USED_ITEM if used else Outcome.NO_TURN
    elif action == Action.DROP_ITEM:
        return drop_item_system(state, _require_index(command)), Outcome.DROPPED_ITEM
    raise ValueError(f"Action is not valid: {action}")


def _step_move_or_attack(state: State, action: Action) -> StepResult:
    """Attack a living fighter in the destination tile, otherwise try to move there."""
    player_id = state.player_id
    dx, dy = MOVE_DELTAS[action]
    pos = state.position[player_id]
    destination = Position(pos.x + dx, pos.y + dy)

    targets = [
        eid
        for eid in entities_with_components_at(state, destination, state.fighter)
        if eid != player_id and eid not in state.dead
    ]
    if targets:
        return attack_system(state, player_id, targets[0]), Outcome.ATTACKED

    moved = movement_system(state, player_id, dx, dy)
    if moved is state:
        return state, Outcome.NO_TURN
    return moved, Outcome.MOVED


def _require_index(command: Command) -> int:
    if command.item_index is None:
        raise ValueError(f"{command.action} requires an inventory index")
    return command.item_index
