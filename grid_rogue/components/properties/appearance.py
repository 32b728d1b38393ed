"""Rendering appearance component.

``Appearance`` is the glyph and colour an entity is drawn with. Entities are
drawn in ascending ``priority`` order so a higher priority ends up on top;
corpses drop to the lowest priority so that living things cover them.
"""

from dataclasses import dataclass

from grid_rogue.types import Color


CORPSE_PRIORITY = 0
ITEM_PRIORITY = 1
ACTOR_PRIORITY = 2


@dataclass(frozen=True)
class Appearance:
    """Visual rendering metadata.

    Attributes:
        glyph: Single character drawn on the map.
        color: Palette entry for the glyph.
        priority: Draw order; higher values are drawn later (on top).
    """

    glyph: str
    color: Color
    priority: int = ACTOR_PRIORITY
