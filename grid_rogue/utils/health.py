"""Hit point helpers."""

from dataclasses import replace

from grid_rogue.components import Fighter


def apply_damage(fighter: Fighter, damage: int) -> Fighter:
    """Return ``fighter`` with ``damage`` subtracted, floored at zero."""
    if damage < 0:
        raise ValueError(f"Negative damage: {damage}")
    return replace(fighter, hp=max(0, fighter.hp - damage))


def apply_heal(fighter: Fighter, amount: int) -> Fighter:
    """Return ``fighter`` healed by ``amount``, capped at ``max_hp``."""
    return replace(fighter, hp=min(fighter.max_hp, fighter.hp + amount))


def is_full_health(fighter: Fighter) -> bool:
    return fighter.hp >= fighter.max_hp
