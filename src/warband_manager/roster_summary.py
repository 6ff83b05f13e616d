"""Cost summary of a warband for display."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.cost_engine.cost_calculator import CostCalculator, WeirdoCostBreakdown
from src.cost_engine.models import Warband
from src.warband_manager.config import TROOPER_MAXIMUM_LIMIT, TROOPER_STANDARD_LIMIT
from src.warband_manager.warband_rules import find_special_slot


@dataclass(frozen=True)
class WeirdoSummary:
    weirdo_id: str
    name: str
    weirdo_type: str
    breakdown: WeirdoCostBreakdown
    cost_limit: Optional[int] = None  # None for leaders
    holds_special_slot: bool = False

    @property
    def cost(self) -> int:
        return self.breakdown.total

    def to_dict(self) -> Dict:
        return {
            "id": self.weirdo_id,
            "name": self.name,
            "type": str(getattr(self.weirdo_type, "value", self.weirdo_type)),
            "cost": self.cost,
            "cost_limit": self.cost_limit,
            "holds_special_slot": self.holds_special_slot,
            "attributes": dict(self.breakdown.attributes),
            "close_combat_weapons": self.breakdown.close_combat_weapons,
            "ranged_weapons": self.breakdown.ranged_weapons,
            "equipment": self.breakdown.equipment,
            "psychic_powers": self.breakdown.psychic_powers,
        }


@dataclass(frozen=True)
class WarbandSummary:
    warband_id: str
    name: str
    point_limit: int
    weirdos: List[WeirdoSummary] = field(default_factory=list)

    @property
    def total_cost(self) -> int:
        return sum(w.cost for w in self.weirdos)

    @property
    def remaining_points(self) -> int:
        return self.point_limit - self.total_cost

    @property
    def is_over_limit(self) -> bool:
        return self.total_cost > self.point_limit

    def to_dict(self) -> Dict:
        return {
            "id": self.warband_id,
            "name": self.name,
            "point_limit": self.point_limit,
            "total_cost": self.total_cost,
            "remaining": self.remaining_points,
            "weirdos": [w.to_dict() for w in self.weirdos],
        }


def summarize_warband(warband: Warband, calculator: CostCalculator) -> WarbandSummary:
    """
    Build a per-weirdo cost summary for *warband*.

    Troopers get the cap that applies to them: 25 for the special-slot
    holder, 20 for everyone else. Leaders have no cap.
    """
    breakdowns = [
        calculator.calculate_weirdo_breakdown(weirdo, warband.ability)
        for weirdo in warband.weirdos
    ]
    slot = find_special_slot([b.total for b in breakdowns])

    weirdos = []
    for index, (weirdo, breakdown) in enumerate(zip(warband.weirdos, breakdowns)):
        holds_slot = slot.occupant_index == index
        if not weirdo.is_trooper:
            cost_limit = None
        elif holds_slot:
            cost_limit = TROOPER_MAXIMUM_LIMIT
        else:
            cost_limit = TROOPER_STANDARD_LIMIT

        weirdos.append(
            WeirdoSummary(
                weirdo_id=weirdo.id,
                name=weirdo.name,
                weirdo_type=weirdo.weirdo_type,
                breakdown=breakdown,
                cost_limit=cost_limit,
                holds_special_slot=holds_slot,
            )
        )

    return WarbandSummary(
        warband_id=warband.id,
        name=warband.name,
        point_limit=warband.point_limit,
        weirdos=weirdos,
    )
