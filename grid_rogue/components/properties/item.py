"""Item component.

Marks an entity as something the player can pick up, carry and use. The
``effect`` tag selects the handler in :mod:`grid_rogue.systems.items`.
"""

from dataclasses import dataclass

from grid_rogue.types import ItemEffect


@dataclass(frozen=True)
class Item:
    effect: ItemEffect
