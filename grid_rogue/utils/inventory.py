"""Inventory manipulation helpers."""

from grid_rogue.components import Inventory
from grid_rogue.types import EntityID


def add_item(inventory: Inventory, item_id: EntityID) -> Inventory:
    """Return a new inventory with ``item_id`` appended."""
    return Inventory(item_ids=inventory.item_ids.append(item_id))


def remove_item(inventory: Inventory, item_id: EntityID) -> Inventory:
    """Return a new inventory with ``item_id`` removed, keeping the order of the rest."""
    return Inventory(item_ids=inventory.item_ids.remove(item_id))


def item_at(inventory: Inventory, index: int) -> EntityID:
    """Return the item in slot ``index``.

    Raises:
        ValueError: If the slot is empty.
    """
    if not 0 <= index < len(inventory.item_ids):
        raise ValueError(f"Inventory slot {index} is empty")
    return inventory.item_ids[index]


def is_full(inventory: Inventory, capacity: int) -> bool:
    return len(inventory.item_ids) >= capacity
