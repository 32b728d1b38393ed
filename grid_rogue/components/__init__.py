"""grid_rogue.components
=======================

Aggregate import surface for all component dataclasses used by the engine.

An entity is an integer id; what it *is* comes from which of these records it
carries. A monster has ``Position``, ``Appearance``, ``Blocking``,
``Fighter`` and ``AI``; a potion on the floor has ``Position``,
``Appearance`` and ``Item``; the same potion in the player's pack has only
``Appearance`` and ``Item``. Downstream code imports components from one
place, e.g.::

    from grid_rogue.components import Position, Fighter, AI

All component classes are frozen ``@dataclass`` value objects with no
behaviour; systems in :mod:`grid_rogue.systems` transform them.
"""

from .properties import ACTOR_PRIORITY
from .properties import AI
from .properties import Appearance
from .properties import Blocking
from .properties import CORPSE_PRIORITY
from .properties import Dead
from .properties import Fighter
from .properties import ITEM_PRIORITY
from .properties import Inventory
from .properties import Item
from .properties import Position

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
