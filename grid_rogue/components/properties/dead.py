"""Dead marker component (post-mortem)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Dead:
    """Marker set by combat logic when hit points reach zero."""

    pass
