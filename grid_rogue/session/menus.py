"""Menus drawn through the renderer and answered through the input source.

Options are labelled ``a``, ``b``, ``c``...; pressing the matching key picks
the option, any other key cancels (``None``).
"""

import string
from typing import Optional, Sequence

from grid_rogue.session.context import GameContext
from grid_rogue.state import State


MAX_MENU_OPTIONS = 26
INVENTORY_EMPTY = "Inventory is empty."


def menu(ctx: GameContext, header: str, options: Sequence[str]) -> Optional[int]:
    """Show ``options`` and return the chosen index, or ``None`` if cancelled.

    Raises:
        ValueError: If there are more options than letters.
    """
    if len(options) > MAX_MENU_OPTIONS:
        raise ValueError(f"Cannot have a menu with more than {MAX_MENU_OPTIONS} options.")
    ctx.renderer.render_menu(header, options)
    event = ctx.input.wait()
    if event.key is None or len(event.key) != 1:
        return None
    index = string.ascii_lowercase.find(event.key.lower())
    if 0 <= index < len(options):
        return index
    return None


def message_box(ctx: GameContext, text: str) -> None:
    """Show ``text`` and wait for any key."""
    menu(ctx, text, [])


def confirm(ctx: GameContext, question: str) -> bool:
    return menu(ctx, question, ["Yes", "No"]) == 0


def inventory_menu(ctx: GameContext, state: State, header: str) -> Optional[int]:
    """Let the player pick an inventory slot; ``None`` if cancelled or empty."""
    item_ids = state.inventory[state.player_id].item_ids
    if len(item_ids) == 0:
        menu(ctx, header, [INVENTORY_EMPTY])
        return None
    return menu(ctx, header, [state.entity[eid].name for eid in item_ids])
