"""Player commands and action outcomes.

An :class:`Action` is what the player asked for, a :class:`Command` is that
request plus its arguments (inventory slot, target tile) and an
:class:`Outcome` is what actually happened once it was resolved against the
state. Only outcomes in :data:`TURN_OUTCOMES` let the monsters act.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Optional, Tuple

from grid_rogue.components import Position


class Action(StrEnum):
    """String enum of player actions.

    Members:
        UP, DOWN, LEFT, RIGHT, UP_LEFT, UP_RIGHT, DOWN_LEFT, DOWN_RIGHT:
            Move (or attack whatever blocks the destination).
        WAIT: Spend a turn without moving.
        PICK_UP: Collect the first item at the player's position.
        USE_ITEM: Use the inventory item at ``Command.item_index``.
        DROP_ITEM: Drop the inventory item at ``Command.item_index``.
        NONE: Nothing happened (no key, unknown key, cancelled menu).
        EXIT: Leave the session (saves the game).
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    UP_LEFT = auto()
    UP_RIGHT = auto()
    DOWN_LEFT = auto()
    DOWN_RIGHT = auto()
    WAIT = auto()
    PICK_UP = auto()
    USE_ITEM = auto()
    DROP_ITEM = auto()
    NONE = auto()
    EXIT = auto()


MOVE_DELTAS: dict[Action, Tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
    Action.UP_LEFT: (-1, -1),
    Action.UP_RIGHT: (1, -1),
    Action.DOWN_LEFT: (-1, 1),
    Action.DOWN_RIGHT: (1, 1),
}

MOVE_ACTIONS = list(MOVE_DELTAS)


class Outcome(StrEnum):
    """Result of resolving one player command."""

    MOVED = auto()
    ATTACKED = auto()
    WAITED = auto()
    USED_ITEM = auto()
    DROPPED_ITEM = auto()
    PICKED_UP_ITEM = auto()
    NO_TURN = auto()
    EXIT = auto()


TURN_OUTCOMES = frozenset(
    {
        Outcome.MOVED,
        Outcome.ATTACKED,
        Outcome.WAITED,
        Outcome.USED_ITEM,
        Outcome.DROPPED_ITEM,
        Outcome.PICKED_UP_ITEM,
    }
)


@dataclass(frozen=True)
class Command:
    """A player request ready to be resolved by :func:`grid_rogue.step.step`.

    Attributes:
        action: Requested action.
        item_index: Inventory slot for ``USE_ITEM`` / ``DROP_ITEM``.
        target: Tile chosen with the pointer, used by targeted items.
    """

    action: Action
    item_index: Optional[int] = None
    target: Optional[Position] = None
