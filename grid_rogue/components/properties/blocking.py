"""Blocking component.

Marks an entity as occupying its tile: nothing else can move into it.
Living monsters and the player block, items and corpses do not.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Blocking:
    """Marker (no data)."""

    pass
