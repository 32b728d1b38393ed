from dataclasses import dataclass

from pyrsistent import PVector

from grid_rogue.types import EntityID


@dataclass(frozen=True)
class Inventory:
    """Ordered list of carried item entity IDs.

    Unlike a set, the persistent vector keeps insertion order, which is the
    order the inventory menu shows and the order restored after loading.

    Attributes:
        item_ids:
            Persistent vector of carried item identifiers, oldest first.
    """

    item_ids: PVector[EntityID]
