"""Property component aggregates.

This module re-exports the *property* components: the optional capability
records an entity may carry (:class:`Position`, :class:`Fighter`,
:class:`AI`, :class:`Item`, :class:`Inventory`, ...). Systems read these
dataclasses to resolve movement, combat, monster turns, item use and
rendering.

All properties are immutable dataclasses; creating a new instance (or removing
one from an entity) is how state changes are expressed between steps.
"""

from .ai import AI
from .appearance import (
    ACTOR_PRIORITY,
    CORPSE_PRIORITY,
    ITEM_PRIORITY,
    Appearance,
)
from .blocking import Blocking
from .dead import Dead
from .fighter import Fighter
from .inventory import Inventory
from .item import Item
from .position import Position

__all__ = [
    "ACTOR_PRIORITY",
    "AI",
    "Appearance",
    "Blocking",
    "CORPSE_PRIORITY",
    "Dead",
    "Fighter",
    "ITEM_PRIORITY",
    "Inventory",
    "Item",
    "Position",
]
