"""Warband validation.

Runs every constraint rule against a warband snapshot and collects all
failures in a fixed order. User mistakes come back as ValidationFailure
values; missing reference data raises ReferenceDataError from the cost
calculator and is never reported as a failure.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from src.cost_engine.cost_calculator import CostCalculator
from src.cost_engine.models import Warband, Weirdo
from src.warband_manager import warband_rules
from src.warband_manager.validation_result import ValidationResult

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Validate warbands against the full rule set."""

    def __init__(self, reference_data, calculator: Optional[CostCalculator] = None):
        self.reference_data = reference_data
        self.calculator = calculator or CostCalculator(reference_data)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_warband(self, warband: Warband) -> ValidationResult:
        """
        Validate *warband* and return every failure found.

        Order: warband name, point limit, per-weirdo rules (weirdos in
        order), special-slot uniqueness, trooper ceilings, warband total.
        No rule short-circuits another.
        """
        logger.debug(
            "Validating warband %s (%d weirdos)", warband.id, len(warband.weirdos)
        )
        result = ValidationResult()

        self._append(result, warband_rules.check_warband_name(warband))
        self._append(result, warband_rules.check_point_limit(warband))

        for weirdo in warband.weirdos:
            self._run_weirdo_rules(result, weirdo, warband.ability)

        costs = self._weirdo_costs(warband)
        slot = warband_rules.find_special_slot(costs)

        self._append(result, warband_rules.check_special_slot_uniqueness(warband, slot))

        for index, (weirdo, cost) in enumerate(zip(warband.weirdos, costs)):
            self._append(
                result, warband_rules.check_trooper_ceiling(weirdo, index, cost, slot)
            )

        total_cost = sum(costs)
        self._append(
            result, warband_rules.check_warband_point_limit(warband, total_cost)
        )

        # Warnings
        for index, (weirdo, cost) in enumerate(zip(warband.weirdos, costs)):
            self._warn(
                result,
                warband_rules.check_trooper_approaching_limit(weirdo, index, cost, slot),
            )
        self._warn(
            result, warband_rules.check_warband_approaching_limit(warband, total_cost)
        )

        logger.debug(
            "Warband %s: %d points, %d failures, %d warnings",
            warband.id,
            total_cost,
            len(result.failures),
            len(result.warnings),
        )
        return result

    def validate_weirdo(self, weirdo: Weirdo, warband: Warband) -> ValidationResult:
        """
        Validate a single weirdo in the context of *warband*.

        Runs the per-weirdo rules, the weirdo's trooper ceiling and, when the
        weirdo contests a special slot another member already holds, the
        uniqueness rule scoped to this weirdo. The weirdo replaces the
        warband member with the same id, or is appended when it is not yet a
        member.
        """
        weirdos = list(warband.weirdos)
        index = next((i for i, w in enumerate(weirdos) if w.id == weirdo.id), None)
        if index is None:
            index = len(weirdos)
            weirdos.append(weirdo)
        else:
            weirdos[index] = weirdo

        result = ValidationResult()
        self._run_weirdo_rules(result, weirdo, warband.ability)

        costs = [
            self.calculator.calculate_weirdo_cost(w, warband.ability) for w in weirdos
        ]
        slot = warband_rules.find_special_slot(costs)
        if index in slot.violator_indexes:
            # blame this weirdo only
            self._append(
                result,
                warband_rules.check_special_slot_uniqueness(
                    replace(warband, weirdos=tuple(weirdos)),
                    warband_rules.SpecialSlot(slot.occupant_index, (index,)),
                ),
            )
        self._append(
            result,
            warband_rules.check_trooper_ceiling(weirdo, index, costs[index], slot),
        )
        self._warn(
            result,
            warband_rules.check_trooper_approaching_limit(
                weirdo, index, costs[index], slot
            ),
        )

        logger.debug(
            "Weirdo %s: %d points, %d failures",
            weirdo.id,
            costs[index],
            len(result.failures),
        )
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _weirdo_costs(self, warband: Warband) -> List[int]:
        return [
            self.calculator.calculate_weirdo_cost(weirdo, warband.ability)
            for weirdo in warband.weirdos
        ]

    def _run_weirdo_rules(self, result: ValidationResult, weirdo: Weirdo, ability) -> None:
        for rule in warband_rules.WEIRDO_RULES:
            self._append(result, rule(weirdo, ability))

    @staticmethod
    def _append(result: ValidationResult, failure) -> None:
        if failure is not None:
            result.failures.append(failure)

    @staticmethod
    def _warn(result: ValidationResult, warning) -> None:
        if warning is not None:
            result.warnings.append(warning)
