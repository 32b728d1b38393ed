"""Common type aliases and enumerations.

Behaviour tags (``DeathBehavior``, ``AIBehavior``, ``ItemEffect``) are closed
string enums. Systems dispatch on them through lookup tables, and the save
codec stores them by value, so renaming a member is a save format change.
"""

from enum import StrEnum, auto


EntityID = int


class Color(StrEnum):
    """Named palette shared by appearances and the message log."""

    WHITE = auto()
    RED = auto()
    DARK_RED = auto()
    ORANGE = auto()
    YELLOW = auto()
    LIGHT_YELLOW = auto()
    GREEN = auto()
    LIGHT_GREEN = auto()
    DARKER_GREEN = auto()
    DESATURATED_GREEN = auto()
    LIGHT_BLUE = auto()
    LIGHT_CYAN = auto()
    LIGHT_VIOLET = auto()
    VIOLET = auto()


class DeathBehavior(StrEnum):
    """What happens to a fighter whose hit points reach zero."""

    PLAYER = auto()
    MONSTER = auto()


class AIBehavior(StrEnum):
    """Monster decision strategies."""

    BASIC = auto()
    CONFUSED = auto()


class ItemEffect(StrEnum):
    """Effect applied when an inventory item is used."""

    HEAL = auto()
    LIGHTNING = auto()
    CONFUSE = auto()
    FIREBALL = auto()


class AIOrder(StrEnum):
    """Order in which AI entities act within a turn.

    ``SEQUENCE`` walks entities by ascending id (deterministic and cheap).
    ``NEAREST_FIRST`` lets the monsters closest to the player act first, ties
    broken by id.
    """

    SEQUENCE = auto()
    NEAREST_FIRST = auto()
