from dataclasses import dataclass
from typing import Optional

from grid_rogue.types import AIBehavior


@dataclass(frozen=True)
class AI:
    """AI behaviour record for monsters.

    Attributes:
        behavior:
            Strategy used this turn.
        previous:
            Strategy restored when a temporary one (``CONFUSED``) wears off.
        turns_left:
            Remaining turns of a temporary strategy; ignored for ``BASIC``.
    """

    behavior: AIBehavior = AIBehavior.BASIC
    previous: Optional[AIBehavior] = None
    turns_left: int = 0
