"""Point cost calculation for weirdos and warbands.

Combines reference data lookups with the cost modifier strategy of the
warband's ability. Every method is pure: the same reference data and
selections always give the same cost.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from src.cost_engine.cost_modifiers import create_cost_modifier_strategy
from src.cost_engine.models import (
    AttributeLevel,
    Warband,
    WeaponType,
    Weirdo,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeirdoCostBreakdown:
    """Per-category cost of a single weirdo."""

    weirdo_id: str
    attributes: Dict[str, int] = field(default_factory=dict)
    close_combat_weapons: int = 0
    ranged_weapons: int = 0
    equipment: int = 0
    psychic_powers: int = 0

    @property
    def attribute_total(self) -> int:
        return sum(self.attributes.values())

    @property
    def total(self) -> int:
        return (
            self.attribute_total
            + self.close_combat_weapons
            + self.ranged_weapons
            + self.equipment
            + self.psychic_powers
        )


class CostCalculator:
    """Calculate point costs with warband ability modifiers applied.

    ``reference_data`` is any provider exposing ``lookup_attribute_cost``,
    ``lookup_weapon``, ``lookup_equipment`` and ``lookup_psychic_power``
    (see :class:`src.reference_data.repository.ReferenceData`). Lookup
    misses raise ``ReferenceDataError`` and are never costed as zero.
    """

    def __init__(self, reference_data):
        self.reference_data = reference_data

    # ------------------------------------------------------------------
    # Single items
    # ------------------------------------------------------------------

    def get_attribute_cost(
        self, attribute_type: str, level: AttributeLevel, ability: Optional[str] = None
    ) -> int:
        base_cost = self.reference_data.lookup_attribute_cost(attribute_type, level)
        strategy = create_cost_modifier_strategy(ability)
        return strategy.apply_attribute_discount(attribute_type, level, base_cost)

    def get_weapon_cost(
        self, name: str, weapon_type: str, ability: Optional[str] = None
    ) -> int:
        weapon = self.reference_data.lookup_weapon(name, weapon_type)
        return create_cost_modifier_strategy(ability).apply_weapon_discount(weapon)

    def get_equipment_cost(self, name: str, ability: Optional[str] = None) -> int:
        equipment = self.reference_data.lookup_equipment(name)
        return create_cost_modifier_strategy(ability).apply_equipment_discount(equipment)

    def get_psychic_power_cost(self, name: str) -> int:
        """Psychic powers have fixed costs; no ability modifies them."""
        return self.reference_data.lookup_psychic_power(name).cost

    # ------------------------------------------------------------------
    # Weirdos and warbands
    # ------------------------------------------------------------------

    def calculate_weirdo_breakdown(
        self, weirdo: Weirdo, ability: Optional[str] = None
    ) -> WeirdoCostBreakdown:
        """Cost of each category for *weirdo*.

        Unselected attributes contribute nothing; attribute completeness is
        a validation concern, not a costing error.
        """
        attributes = {
            attribute_type: self.get_attribute_cost(attribute_type, level, ability)
            for attribute_type, level in weirdo.selected_attributes().items()
        }

        return WeirdoCostBreakdown(
            weirdo_id=weirdo.id,
            attributes=attributes,
            close_combat_weapons=sum(
                self.get_weapon_cost(name, WeaponType.CLOSE, ability)
                for name in weirdo.close_combat_weapons
            ),
            ranged_weapons=sum(
                self.get_weapon_cost(name, WeaponType.RANGED, ability)
                for name in weirdo.ranged_weapons
            ),
            equipment=sum(
                self.get_equipment_cost(name, ability) for name in weirdo.equipment
            ),
            psychic_powers=sum(
                self.get_psychic_power_cost(name) for name in weirdo.psychic_powers
            ),
        )

    def calculate_weirdo_cost(self, weirdo: Weirdo, ability: Optional[str] = None) -> int:
        """Total point cost of *weirdo* under *ability*."""
        return self.calculate_weirdo_breakdown(weirdo, ability).total

    def calculate_warband_cost(self, warband: Warband) -> int:
        """Sum of every weirdo's cost under the warband's ability."""
        total = sum(
            self.calculate_weirdo_cost(weirdo, warband.ability)
            for weirdo in warband.weirdos
        )
        logger.debug(
            "Warband %s: %d weirdos, %d points", warband.id, len(warband.weirdos), total
        )
        return total
