"""Turn loop.

:func:`play_game` drives one session of play, one frame per iteration:

1. Poll one input event (a poll without a key is a no-op frame).
2. Set the recompute flag if the player's position differs from the one
   recorded on the previous frame (always set on the first frame).
3. When the flag is set, recompute the field of view and mark what it
   reveals as explored; then render.
4. Turn the event into a :class:`Command` (this may open the inventory menu)
   and resolve it with :func:`grid_rogue.step.step`, which also lets every
   monster act when the command consumed a turn.
5. ``EXIT`` saves the game and ends the session. If saving fails the player
   is asked whether to retry; declining ends the session without a save.

The loop also ends when the input source reports the window closed; no save
is attempted then.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Optional

from grid_rogue.actions import Action, Command, Outcome
from grid_rogue.components import Position
from grid_rogue.input import InputEvent
from grid_rogue.persistence import PersistenceError
from grid_rogue.session.context import GameContext
from grid_rogue.session.menus import confirm, inventory_menu
from grid_rogue.state import State
from grid_rogue.step import step
from grid_rogue.systems.fov import View, compute_view, explore_system


logger = logging.getLogger(__name__)

USE_HEADER = "Press the key next to an item to use it, or any other to cancel.\n"
DROP_HEADER = "Press the key next to an item to drop it, or any other to cancel.\n"


class LoopExit(StrEnum):
    """How a session ended."""

    SAVED = auto()
    UNSAVED = auto()
    WINDOW_CLOSED = auto()


@dataclass(frozen=True)
class PlayResult:
    state: State
    exit: LoopExit
    frames: int


def command_from_event(ctx: GameContext, state: State, event: InputEvent) -> Command:
    """Translate a raw input event into a player command.

    Inventory actions open a menu; cancelling it yields ``Action.NONE``.
    Once the player is dead only ``EXIT`` is honoured.
    """
    if event.key is None:
        return Command(Action.NONE)
    action = ctx.config.keymap.get(event.key)
    if action is None:
        return Command(Action.NONE)
    if state.lose and action != Action.EXIT:
        return Command(Action.NONE)

    if action in (Action.USE_ITEM, Action.DROP_ITEM):
        header = USE_HEADER if action == Action.USE_ITEM else DROP_HEADER
        index = inventory_menu(ctx, state, header)
        if index is None:
            return Command(Action.NONE)
        return Command(action, item_index=index, target=ctx.pointer)
    return Command(action)


def save_game(ctx: GameContext, state: State) -> bool:
    """Save ``state``, offering a retry on failure. Returns True once saved."""
    while True:
        try:
            ctx.store.save(state)
            return True
        except PersistenceError as exc:
            logger.error("Saving failed: %s", exc)
            if not confirm(ctx, f"Could not save the game: {exc}\nTry again?"):
                logger.warning("Player left without saving")
                return False


def play_game(ctx: GameContext, state: State, view: View) -> PlayResult:
    """Run the turn loop on an initialized state until exit or window close.

    Args:
        ctx (GameContext): Session collaborators.
        state (State): State whose view was just initialized.
        view (View): Field of view matching ``state``.

    Returns:
        PlayResult: Final state, how the session ended and the frame count.
    """
    ctx.pointer = None
    previous_position: Optional[Position] = None
    frames = 0

    while not ctx.input.closed:
        event = ctx.input.poll()
        if ctx.input.closed:
            break
        if event.pointer is not None:
            ctx.pointer = event.pointer

        player_position = state.position[state.player_id]
        recompute = player_position != previous_position
        if recompute:
            view = compute_view(state, ctx.config.fov_radius, ctx.config.fov_light_walls)
            state = explore_system(state, view)
        ctx.renderer.render(state, view, recompute, ctx.pointer)
        previous_position = player_position

        command = command_from_event(ctx, state, event)
        state, outcome = step(state, command, view, ctx.config.ai_order)
        frames += 1

        if outcome == Outcome.EXIT:
            saved = save_game(ctx, state)
            return PlayResult(state, LoopExit.SAVED if saved else LoopExit.UNSAVED, frames)

    logger.info("Window closed during play after %d frames", frames)
    return PlayResult(state, LoopExit.WINDOW_CLOSED, frames)
