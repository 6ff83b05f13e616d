"""Warband ability cost modifiers.

Each warband ability that changes point costs has one strategy class. The
base class is the identity on all three operations; variants override only
the operations their ability touches. Discounts never push a cost below
zero.
"""

import logging
from typing import Dict, Optional

from src.cost_engine.config import (
    HEAVILY_ARMED_DISCOUNT,
    MINIMUM_COST,
    MUTANT_DISCOUNT,
    MUTANT_WEAPONS,
    SOLDIER_FREE_EQUIPMENT,
)
from src.cost_engine.models import (
    AttributeLevel,
    AttributeType,
    Equipment,
    WarbandAbility,
    Weapon,
    WeaponType,
)

logger = logging.getLogger(__name__)


def _clamp(cost: int) -> int:
    return max(MINIMUM_COST, cost)


class CostModifierStrategy:
    """Cost adjustments granted by a warband ability."""

    ability: Optional[WarbandAbility] = None

    def apply_weapon_discount(self, weapon: Weapon) -> int:
        return weapon.base_cost

    def apply_equipment_discount(self, equipment: Equipment) -> int:
        return equipment.base_cost

    def apply_attribute_discount(
        self, attribute_type: str, level: AttributeLevel, base_cost: int
    ) -> int:
        return base_cost

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DefaultCostStrategy(CostModifierStrategy):
    """No ability, or an ability without cost effects."""


class MutantsCostStrategy(CostModifierStrategy):
    """Speed and natural close combat weapons cost 1 less."""

    ability = WarbandAbility.MUTANTS

    def apply_weapon_discount(self, weapon: Weapon) -> int:
        if weapon.weapon_type == WeaponType.CLOSE and weapon.name in MUTANT_WEAPONS:
            return _clamp(weapon.base_cost - MUTANT_DISCOUNT)
        return weapon.base_cost

    def apply_attribute_discount(
        self, attribute_type: str, level: AttributeLevel, base_cost: int
    ) -> int:
        if attribute_type == AttributeType.SPEED:
            return _clamp(base_cost - MUTANT_DISCOUNT)
        return base_cost


class HeavilyArmedCostStrategy(CostModifierStrategy):
    """Every ranged weapon costs 1 less."""

    ability = WarbandAbility.HEAVILY_ARMED

    def apply_weapon_discount(self, weapon: Weapon) -> int:
        if weapon.weapon_type == WeaponType.RANGED:
            return _clamp(weapon.base_cost - HEAVILY_ARMED_DISCOUNT)
        return weapon.base_cost


class SoldiersCostStrategy(CostModifierStrategy):
    """Grenades, Heavy Armor and Medkits are free."""

    ability = WarbandAbility.SOLDIERS

    def apply_equipment_discount(self, equipment: Equipment) -> int:
        if equipment.name in SOLDIER_FREE_EQUIPMENT:
            return 0
        return equipment.base_cost


# Abilities missing here have no cost effect (Cyborgs only raises the
# equipment limit, see warband_manager.config.EQUIPMENT_LIMITS).
_STRATEGIES: Dict[WarbandAbility, CostModifierStrategy] = {
    WarbandAbility.MUTANTS: MutantsCostStrategy(),
    WarbandAbility.HEAVILY_ARMED: HeavilyArmedCostStrategy(),
    WarbandAbility.SOLDIERS: SoldiersCostStrategy(),
}

_DEFAULT_STRATEGY = DefaultCostStrategy()


def create_cost_modifier_strategy(ability: Optional[str]) -> CostModifierStrategy:
    """Return the strategy for *ability*.

    ``None``, abilities without cost effects and unrecognized values all map
    to the default (identity) strategy so cost computation stays total.
    """
    if ability is None:
        return _DEFAULT_STRATEGY

    try:
        known = WarbandAbility(ability)
    except ValueError:
        logger.debug("Unrecognized warband ability %r, using default costs", ability)
        return _DEFAULT_STRATEGY

    return _STRATEGIES.get(known, _DEFAULT_STRATEGY)
