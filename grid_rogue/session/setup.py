"""Session setup shared by every way into a game.

:func:`new_game` builds a fresh state from nothing (so no entity, message or
map survives from an earlier session). :func:`initialize_fov` is the single
place where a state about to be played gets its field of view; new and loaded
games both pass through it.
"""

import logging
import random
from typing import Optional, Tuple

from grid_rogue.components import Position
from grid_rogue.config import GameConfig
from grid_rogue.levels.dungeon import generate_dungeon
from grid_rogue.levels.factories import create_player, spawn
from grid_rogue.state import State, create_empty_state, validate_state
from grid_rogue.systems.fov import View, compute_view, explore_system
from grid_rogue.types import Color
from grid_rogue.utils.messages import add_message


logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome stranger! Prepare to perish in the Tombs of the Ancient Kings."
)


def new_game(config: GameConfig, seed: Optional[int] = None) -> State:
    """Create the player, generate a dungeon and greet the player.

    Arguments:
        config: Map and generation settings.
        seed: Explicit seed; falls back to ``config.seed``, then to a random one.
    """
    if seed is None:
        seed = config.seed if config.seed is not None else random.randrange(2**31)
    rng = random.Random(seed)

    state = create_empty_state(
        config.map_width,
        config.map_height,
        seed=seed,
        inventory_capacity=config.inventory_capacity,
    )
    state, player_id = spawn(state, create_player(), Position(0, 0))
    if player_id != state.player_id:
        raise RuntimeError(f"Player spawned as entity {player_id}")
    state = generate_dungeon(state, rng, config)
    state = add_message(state, WELCOME_MESSAGE, Color.RED)

    logger.info("New game with seed %d", seed)
    return validate_state(state)


def initialize_fov(state: State, config: GameConfig) -> Tuple[State, View]:
    """Compute the player's view and mark what it reveals as explored."""
    view = compute_view(state, config.fov_radius, config.fov_light_walls)
    return explore_system(state, view), view
