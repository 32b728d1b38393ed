"""Convenience factory functions for authoring ``EntitySpec`` objects.

Each helper returns a preconfigured :class:`EntitySpec` (player, monsters,
potions and scrolls). :func:`spawn` materializes a blueprint into a
:class:`State` under a freshly allocated id.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from pyrsistent import pvector

from grid_rogue.components.properties import (
    ACTOR_PRIORITY,
    AI,
    ITEM_PRIORITY,
    Appearance,
    Blocking,
    Fighter,
    Inventory,
    Item,
    Position,
)
from grid_rogue.entity import Entity, next_entity_id
from grid_rogue.state import State
from grid_rogue.types import Color, DeathBehavior, EntityID, ItemEffect
from .entity_spec import EntitySpec


def create_player(hp: int = 30, defense: int = 2, power: int = 5) -> EntitySpec:
    """Player: blocking fighter with an empty inventory."""
    return EntitySpec(
        name="player",
        appearance=Appearance(glyph="@", color=Color.WHITE, priority=ACTOR_PRIORITY),
        blocking=Blocking(),
        fighter=Fighter(
            max_hp=hp, hp=hp, defense=defense, power=power, on_death=DeathBehavior.PLAYER
        ),
        inventory=Inventory(pvector()),
    )


def _monster(
    name: str, glyph: str, color: Color, hp: int, defense: int, power: int
) -> EntitySpec:
    return EntitySpec(
        name=name,
        appearance=Appearance(glyph=glyph, color=color, priority=ACTOR_PRIORITY),
        blocking=Blocking(),
        fighter=Fighter(
            max_hp=hp, hp=hp, defense=defense, power=power, on_death=DeathBehavior.MONSTER
        ),
        ai=AI(),
    )


def create_orc() -> EntitySpec:
    return _monster("orc", "o", Color.DESATURATED_GREEN, hp=10, defense=0, power=3)


def create_troll() -> EntitySpec:
    return _monster("troll", "T", Color.DARKER_GREEN, hp=16, defense=1, power=4)


def _item(name: str, glyph: str, color: Color, effect: ItemEffect) -> EntitySpec:
    return EntitySpec(
        name=name,
        appearance=Appearance(glyph=glyph, color=color, priority=ITEM_PRIORITY),
        item=Item(effect=effect),
    )


def create_healing_potion() -> EntitySpec:
    return _item("healing potion", "!", Color.VIOLET, ItemEffect.HEAL)


def create_lightning_scroll() -> EntitySpec:
    return _item("scroll of lightning bolt", "#", Color.LIGHT_YELLOW, ItemEffect.LIGHTNING)


def create_fireball_scroll() -> EntitySpec:
    return _item("scroll of fireball", "#", Color.LIGHT_YELLOW, ItemEffect.FIREBALL)


def create_confuse_scroll() -> EntitySpec:
    return _item("scroll of confusion", "#", Color.LIGHT_YELLOW, ItemEffect.CONFUSE)


def spawn(
    state: State, spec: EntitySpec, pos: Optional[Position] = None
) -> Tuple[State, EntityID]:
    """Add an entity built from ``spec`` to ``state``.

    Arguments:
        state: State to extend.
        spec: Blueprint to copy components from.
        pos: Map position; ``None`` for off-map entities (carried items).

    Returns:
        Tuple[State, EntityID]: New state and the id allocated for the entity.
    """
    eid = next_entity_id(state)
    fields: Dict[str, Any] = {"entity": state.entity.set(eid, Entity(name=spec.name))}
    for store_name, comp in spec.iter_components():
        fields[store_name] = getattr(state, store_name).set(eid, comp)
    if pos is not None:
        fields["position"] = state.position.set(eid, pos)
    return replace(state, **fields), eid
