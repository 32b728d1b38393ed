from dataclasses import dataclass

from grid_rogue.types import DeathBehavior


@dataclass(frozen=True)
class Fighter:
    """Combat record for anything that can attack or be attacked.

    Attributes:
        max_hp:
            Upper bound for ``hp``; healing clamps to it.
        hp:
            Current hit points. Reaching zero triggers ``on_death``.
        defense:
            Subtracted from the attacker's power.
        power:
            Raw attack strength.
        on_death:
            Death behaviour tag dispatched by the combat system.
    """

    max_hp: int
    hp: int
    defense: int
    power: int
    on_death: DeathBehavior
