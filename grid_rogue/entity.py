"""Entity primitives & ID allocation.

The engine models each *thing* as an ``EntityID`` (an integer) plus zero or
more component dataclasses stored in persistent maps on :class:`State`.

This module provides:
* ``Entity``: the identity record every entity carries (its display name).
* ``PLAYER_ID``: the id reserved for the player.
* State-scoped ID allocation.

Ids are allocated from the state itself (one past the largest id in use), not
from a process-wide counter: a fresh game always starts at ``PLAYER_ID`` and
ids survive a save/load round trip unchanged. An id freed by consuming the
newest item may be handed out again; nothing references consumed items, so
the reuse is harmless.

Examples
--------
>>> from grid_rogue.entity import next_entity_id
>>> eid = next_entity_id(state)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from grid_rogue.types import EntityID

if TYPE_CHECKING:
    from grid_rogue.state import State


PLAYER_ID: EntityID = 0


@dataclass(frozen=True)
class Entity:
    """Identity record.

    Attributes:
        name: Display name used in messages ("orc", "remains of troll").
    """

    name: str


def next_entity_id(state: "State") -> EntityID:
    """Return the next unused entity ID for ``state``."""
    if len(state.entity) == 0:
        return PLAYER_ID
    return max(state.entity.keys()) + 1


def entity_ids_in_order(state: "State") -> List[EntityID]:
    """Return all entity IDs in sequence order (ascending, player first)."""
    return sorted(state.entity.keys())
