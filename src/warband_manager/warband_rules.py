"""Warband constraint rules.

Each rule is a pure check over a warband or a weirdo (plus computed costs)
returning at most one ValidationFailure. Rules never look at each other's
outcome, except the trooper ceiling which needs the special-slot
determination from find_special_slot().
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from src.cost_engine.models import (
    AttributeType,
    Warband,
    WeirdoType,
    Weirdo,
    level_key,
)
from src.warband_manager.config import (
    COST_WARNING_MARGIN,
    EQUIPMENT_LIMITS,
    EXPANDED_EQUIPMENT_ABILITY,
    POINT_LIMIT_WARNING_THRESHOLD,
    QUALIFYING_FIREPOWER_LEVELS,
    SPECIAL_SLOT_MAX,
    SPECIAL_SLOT_MIN,
    TROOPER_MAXIMUM_LIMIT,
    TROOPER_STANDARD_LIMIT,
    VALID_POINT_LIMITS,
)
from src.warband_manager.validation_result import (
    FailureCode,
    ValidationFailure,
    ValidationWarning,
    WarningCode,
)


def _weirdo_field(weirdo: Weirdo, name: str) -> str:
    return f"weirdo.{weirdo.id}.{name}"


def _is_blank(value) -> bool:
    return not isinstance(value, str) or value.strip() == ""


# ── Warband configuration ────────────────────────────────────────────


def check_warband_name(warband: Warband) -> Optional[ValidationFailure]:
    if _is_blank(warband.name):
        return ValidationFailure(
            code=FailureCode.WARBAND_NAME_REQUIRED,
            field="warband.name",
            entity_id=warband.id,
        )
    return None


def check_point_limit(warband: Warband) -> Optional[ValidationFailure]:
    if warband.point_limit not in VALID_POINT_LIMITS:
        return ValidationFailure(
            code=FailureCode.INVALID_POINT_LIMIT,
            field="warband.point_limit",
            entity_id=warband.id,
            params={"point_limit": warband.point_limit},
        )
    return None


# ── Per-weirdo rules ─────────────────────────────────────────────────


def check_weirdo_name(weirdo: Weirdo, ability=None) -> Optional[ValidationFailure]:
    if _is_blank(weirdo.name):
        return ValidationFailure(
            code=FailureCode.WEIRDO_NAME_REQUIRED,
            field=_weirdo_field(weirdo, "name"),
            entity_id=weirdo.id,
        )
    return None


def check_attribute_completeness(weirdo: Weirdo, ability=None) -> Optional[ValidationFailure]:
    """All five attribute types need a selected level."""
    missing = [
        attribute_type.value
        for attribute_type in AttributeType
        if weirdo.attributes.get(attribute_type.value) in (None, "")
    ]
    if missing:
        return ValidationFailure(
            code=FailureCode.ATTRIBUTES_INCOMPLETE,
            field=_weirdo_field(weirdo, "attributes"),
            entity_id=weirdo.id,
            params={"missing": tuple(missing)},
        )
    return None


def check_close_combat_weapon(weirdo: Weirdo, ability=None) -> Optional[ValidationFailure]:
    if len(weirdo.close_combat_weapons) == 0:
        return ValidationFailure(
            code=FailureCode.CLOSE_COMBAT_WEAPON_REQUIRED,
            field=_weirdo_field(weirdo, "close_combat_weapons"),
            entity_id=weirdo.id,
        )
    return None


def check_ranged_firepower(weirdo: Weirdo, ability=None) -> Optional[ValidationFailure]:
    """Ranged weapons and 2d8/2d10 firepower require each other.

    Skipped while firepower is unselected; completeness reports that.
    """
    firepower = weirdo.get_attribute(AttributeType.FIREPOWER)
    if firepower in (None, ""):
        return None

    has_ranged = len(weirdo.ranged_weapons) > 0
    qualifies = level_key(firepower) in QUALIFYING_FIREPOWER_LEVELS

    if has_ranged and not qualifies:
        return ValidationFailure(
            code=FailureCode.FIREPOWER_REQUIRED_FOR_RANGED_WEAPON,
            field=_weirdo_field(weirdo, "attributes.firepower"),
            entity_id=weirdo.id,
            params={"firepower": level_key(firepower)},
        )
    if qualifies and not has_ranged:
        return ValidationFailure(
            code=FailureCode.RANGED_WEAPON_REQUIRED,
            field=_weirdo_field(weirdo, "ranged_weapons"),
            entity_id=weirdo.id,
            params={"firepower": level_key(firepower)},
        )
    return None


def get_equipment_limit(weirdo_type: str, ability: Optional[str] = None) -> int:
    """Leaders carry 2 (3 for Cyborgs), troopers 1 (2 for Cyborgs)."""
    expanded = ability is not None and ability == EXPANDED_EQUIPMENT_ABILITY
    if weirdo_type == WeirdoType.LEADER:
        return EQUIPMENT_LIMITS["leader"]["cyborgs" if expanded else "standard"]
    if weirdo_type == WeirdoType.TROOPER and expanded:
        return EQUIPMENT_LIMITS["trooper"]["cyborgs"]
    return EQUIPMENT_LIMITS["trooper"]["standard"]


def check_equipment_limit(weirdo: Weirdo, ability=None) -> Optional[ValidationFailure]:
    limit = get_equipment_limit(weirdo.weirdo_type, ability)
    count = len(weirdo.equipment)
    if count > limit:
        return ValidationFailure(
            code=FailureCode.EQUIPMENT_LIMIT_EXCEEDED,
            field=_weirdo_field(weirdo, "equipment"),
            entity_id=weirdo.id,
            params={"type": str(getattr(weirdo.weirdo_type, "value", weirdo.weirdo_type)),
                    "limit": limit, "count": count},
        )
    return None


def check_leader_trait(weirdo: Weirdo, ability=None) -> Optional[ValidationFailure]:
    if weirdo.leader_trait and not weirdo.is_leader:
        return ValidationFailure(
            code=FailureCode.LEADER_TRAIT_INVALID,
            field=_weirdo_field(weirdo, "leader_trait"),
            entity_id=weirdo.id,
            params={"leader_trait": str(getattr(weirdo.leader_trait, "value", weirdo.leader_trait))},
        )
    return None


# Evaluation order for the per-weirdo pass
WEIRDO_RULES = (
    check_weirdo_name,
    check_attribute_completeness,
    check_close_combat_weapon,
    check_ranged_firepower,
    check_equipment_limit,
    check_leader_trait,
)


# ── Cross-weirdo rules ───────────────────────────────────────────────


def is_special_slot_cost(cost: int) -> bool:
    return SPECIAL_SLOT_MIN <= cost <= SPECIAL_SLOT_MAX


@dataclass(frozen=True)
class SpecialSlot:
    """Who holds the single 21-25 point slot, by position in the warband.

    The first weirdo (in warband order) costing 21-25 is the occupant;
    every later one is a violator.
    """

    occupant_index: Optional[int] = None
    violator_indexes: Tuple[int, ...] = ()

    @property
    def is_taken(self) -> bool:
        return self.occupant_index is not None


def find_special_slot(costs: Sequence[int]) -> SpecialSlot:
    """Two passes over weirdo costs in warband order."""
    occupant = next(
        (i for i, cost in enumerate(costs) if is_special_slot_cost(cost)), None
    )
    if occupant is None:
        return SpecialSlot()

    violators = tuple(
        i for i in range(occupant + 1, len(costs)) if is_special_slot_cost(costs[i])
    )
    return SpecialSlot(occupant_index=occupant, violator_indexes=violators)


def check_special_slot_uniqueness(
    warband: Warband, slot: SpecialSlot
) -> Optional[ValidationFailure]:
    """One failure for the whole warband, blamed on the first violator."""
    if not slot.violator_indexes:
        return None

    violator_ids = tuple(warband.weirdos[i].id for i in slot.violator_indexes)
    return ValidationFailure(
        code=FailureCode.MULTIPLE_25_POINT_WEIRDOS,
        field="warband.weirdos",
        entity_id=violator_ids[0],
        params={
            "min": SPECIAL_SLOT_MIN,
            "max": SPECIAL_SLOT_MAX,
            "occupant_id": warband.weirdos[slot.occupant_index].id,
            "violator_ids": violator_ids,
        },
    )


def check_trooper_ceiling(
    weirdo: Weirdo, index: int, cost: int, slot: SpecialSlot
) -> Optional[ValidationFailure]:
    """Troopers never exceed 25; with the slot taken, others stay at 20.

    Special-slot violators are not re-blamed here; uniqueness covers them.
    """
    if not weirdo.is_trooper:
        return None

    limit = None
    if cost > TROOPER_MAXIMUM_LIMIT:
        limit = TROOPER_MAXIMUM_LIMIT
    elif (
        slot.is_taken
        and index != slot.occupant_index
        and index not in slot.violator_indexes
        and cost > TROOPER_STANDARD_LIMIT
    ):
        limit = TROOPER_STANDARD_LIMIT

    if limit is None:
        return None
    return ValidationFailure(
        code=FailureCode.TROOPER_POINT_LIMIT_EXCEEDED,
        field=_weirdo_field(weirdo, "total_cost"),
        entity_id=weirdo.id,
        params={"cost": cost, "limit": limit},
    )


def check_warband_point_limit(
    warband: Warband, total_cost: int
) -> Optional[ValidationFailure]:
    """Skipped when the point limit itself is illegal."""
    if warband.point_limit not in VALID_POINT_LIMITS:
        return None
    if total_cost > warband.point_limit:
        return ValidationFailure(
            code=FailureCode.WARBAND_POINT_LIMIT_EXCEEDED,
            field="warband.total_cost",
            entity_id=warband.id,
            params={"total_cost": total_cost, "point_limit": warband.point_limit},
        )
    return None


# ── Advisory warnings ────────────────────────────────────────────────


def _approaching(cost: int, limit: int) -> Optional[int]:
    remaining = limit - cost
    if 0 <= remaining <= COST_WARNING_MARGIN:
        return remaining
    return None


def check_trooper_approaching_limit(
    weirdo: Weirdo, index: int, cost: int, slot: SpecialSlot
) -> Optional[ValidationWarning]:
    """Warn when a trooper sits within a few points of its applicable cap.

    The special-slot holder is measured against 25, everyone else against 20.
    """
    if not weirdo.is_trooper:
        return None

    limit = TROOPER_MAXIMUM_LIMIT if slot.occupant_index == index else TROOPER_STANDARD_LIMIT
    remaining = _approaching(cost, limit)
    if remaining is None:
        return None
    return ValidationWarning(
        code=WarningCode.COST_APPROACHING_LIMIT,
        field=_weirdo_field(weirdo, "total_cost"),
        entity_id=weirdo.id,
        params={"remaining": remaining, "limit": limit},
    )


def check_warband_approaching_limit(
    warband: Warband, total_cost: int
) -> Optional[ValidationWarning]:
    if warband.point_limit not in VALID_POINT_LIMITS:
        return None
    threshold = warband.point_limit * POINT_LIMIT_WARNING_THRESHOLD
    if threshold <= total_cost <= warband.point_limit:
        return ValidationWarning(
            code=WarningCode.WARBAND_APPROACHING_LIMIT,
            field="warband.total_cost",
            entity_id=warband.id,
            params={"total_cost": total_cost, "point_limit": warband.point_limit},
        )
    return None
