"""Menu / session controller.

A three-phase state machine:

* ``MAIN_MENU``: offer new game, continue and quit.
  - new game: build a fresh state, initialize the view, go to ``PLAYING``;
  - continue: load the save; on success initialize the view and go to
    ``PLAYING``, otherwise tell the player there is nothing to load and stay
    (a save whose player is dead counts as nothing to load);
  - quit: go to ``TERMINATED``.
* ``PLAYING``: run the turn loop; when it returns, go back to ``MAIN_MENU``.
* ``TERMINATED``: done. Also reached whenever the window is closed.

New and loaded games both pass through :func:`initialize_fov`, so the turn
loop never starts with a stale view.
"""

import logging
from enum import StrEnum, auto
from typing import Optional

from grid_rogue.persistence import (
    SaveDecodeError,
    SaveIOError,
    SaveNotFoundError,
)
from grid_rogue.session.context import GameContext
from grid_rogue.session.loop import PlayResult, play_game
from grid_rogue.session.menus import menu, message_box
from grid_rogue.session.setup import initialize_fov, new_game
from grid_rogue.state import InvalidStateError, State, validate_state
from grid_rogue.systems.fov import View


logger = logging.getLogger(__name__)

TITLE = "TOMBS OF THE ANCIENT KINGS\n"
MAIN_MENU_OPTIONS = ["Play a new game", "Continue last game", "Quit"]
NO_SAVE_MESSAGE = "\n No saved game to load.\n"


class SessionPhase(StrEnum):
    MAIN_MENU = auto()
    PLAYING = auto()
    TERMINATED = auto()


class SessionController:
    """Owns the phase and, while playing, the current state and view."""

    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self.phase = SessionPhase.MAIN_MENU
        self.state: Optional[State] = None
        self.view: Optional[View] = None
        self.last_result: Optional[PlayResult] = None

    def run(self) -> None:
        """Loop through the phases until ``TERMINATED``."""
        while self.phase != SessionPhase.TERMINATED:
            if self.ctx.input.closed:
                self.phase = SessionPhase.TERMINATED
            elif self.phase == SessionPhase.MAIN_MENU:
                self.main_menu()
            elif self.phase == SessionPhase.PLAYING:
                self.play()
        logger.info("Session terminated")

    def main_menu(self) -> None:
        choice = menu(self.ctx, TITLE, MAIN_MENU_OPTIONS)
        if choice == 0:
            self.start(new_game(self.ctx.config))
        elif choice == 1:
            self.continue_game()
        elif choice == 2:
            self.phase = SessionPhase.TERMINATED

    def continue_game(self) -> None:
        try:
            self.start(self.ctx.store.load())
        except SaveNotFoundError:
            logger.info("No save file at %s", self.ctx.store.path)
        except SaveDecodeError as exc:
            logger.warning("Unreadable save file: %s", exc)
        except InvalidStateError as exc:
            logger.warning("Saved game cannot be continued: %s", exc)
        except SaveIOError as exc:
            logger.error("Cannot read save file: %s", exc)
        else:
            return
        message_box(self.ctx, NO_SAVE_MESSAGE)

    def start(self, state: State) -> None:
        """Enter ``PLAYING`` with ``state`` (new or loaded).

        Raises:
            InvalidStateError: If ``state`` is inconsistent or its player is dead.
        """
        validate_state(state)
        self.state, self.view = initialize_fov(state, self.ctx.config)
        self.phase = SessionPhase.PLAYING

    def play(self) -> None:
        if self.state is None or self.view is None:
            raise RuntimeError("Cannot play without a state")
        self.last_result = play_game(self.ctx, self.state, self.view)
        logger.info(
            "Session ended (%s) after %d frames", self.last_result.exit, self.last_result.frames
        )
        self.state = None
        self.view = None
        self.phase = SessionPhase.MAIN_MENU


def main_menu(ctx: GameContext) -> SessionController:
    """Run the main menu until the player quits or the window closes."""
    controller = SessionController(ctx)
    controller.run()
    return controller
