"""Tests for the cost calculator.

Fixtures ``calculator`` (bundled catalog) and ``scenario_reference_data``
are provided by conftest.py.
"""

import pytest

from src.cost_engine.cost_calculator import CostCalculator
from src.cost_engine.models import Warband, WeaponType, Weirdo
from src.reference_data.repository import ReferenceDataError


def _make_leader(**overrides):
    """Leader costing 21 points with no ability.

    speed 2 (1) + defense/firepower/prowess/willpower 2d8 (4+2+4+4)
    + Sword (1) + Rifle (2) + Grenade, Heavy Armor (1+1) + Fear (1)
    """
    fields = dict(
        id="leader-1",
        name="Boss",
        weirdo_type="leader",
        attributes={
            "speed": 2,
            "defense": "2d8",
            "firepower": "2d8",
            "prowess": "2d8",
            "willpower": "2d8",
        },
        close_combat_weapons=("Sword",),
        ranged_weapons=("Rifle",),
        equipment=("Grenade", "Heavy Armor"),
        psychic_powers=("Fear",),
    )
    fields.update(overrides)
    return Weirdo(**fields)


def _make_mutant_trooper(**overrides):
    """Trooper whose attributes sum to 18 points and who fights with Claws & Teeth.

    speed 1 (0) + defense 2d10 (8) + firepower None (0) + prowess 2d8 (4)
    + willpower 2d10 (6)
    """
    fields = dict(
        id="trooper-1",
        name="Grunt",
        weirdo_type="trooper",
        attributes={
            "speed": 1,
            "defense": "2d10",
            "firepower": "None",
            "prowess": "2d8",
            "willpower": "2d10",
        },
        close_combat_weapons=("Claws & Teeth",),
    )
    fields.update(overrides)
    return Weirdo(**fields)


# ── Single items ─────────────────────────────────────────────────────


class TestItemCosts:
    def test_attribute(self, calculator):
        assert calculator.get_attribute_cost("defense", "2d10") == 8

    def test_attribute_mutants_speed(self, calculator):
        assert calculator.get_attribute_cost("speed", 3, "Mutants") == 2

    def test_weapon(self, calculator):
        assert calculator.get_weapon_cost("Axe", WeaponType.CLOSE) == 3

    def test_weapon_mutants(self, calculator):
        assert calculator.get_weapon_cost("Claws & Teeth", "close", "Mutants") == 1

    def test_weapon_heavily_armed(self, calculator):
        assert calculator.get_weapon_cost("Rifle", "ranged", "Heavily Armed") == 1
        assert calculator.get_weapon_cost("Auto Pistol", "ranged", "Heavily Armed") == 0

    def test_equipment_soldiers(self, calculator):
        assert calculator.get_equipment_cost("Medkit", "Soldiers") == 0
        assert calculator.get_equipment_cost("Jump Pack", "Soldiers") == 1

    def test_psychic_power_fixed(self, calculator):
        assert calculator.get_psychic_power_cost("Telekinesis") == 3

    def test_unknown_weapon_raises(self, calculator):
        with pytest.raises(ReferenceDataError):
            calculator.get_weapon_cost("Chainsaw", "close")


# ── Weirdos ──────────────────────────────────────────────────────────


class TestWeirdoCost:
    def test_no_ability(self, calculator):
        assert calculator.calculate_weirdo_cost(_make_leader()) == 21

    def test_breakdown(self, calculator):
        breakdown = calculator.calculate_weirdo_breakdown(_make_leader())
        assert breakdown.weirdo_id == "leader-1"
        assert breakdown.attributes == {
            "speed": 1,
            "defense": 4,
            "firepower": 2,
            "prowess": 4,
            "willpower": 4,
        }
        assert breakdown.attribute_total == 15
        assert breakdown.close_combat_weapons == 1
        assert breakdown.ranged_weapons == 2
        assert breakdown.equipment == 2
        assert breakdown.psychic_powers == 1
        assert breakdown.total == 21

    @pytest.mark.parametrize("ability, expected", [
        ("Soldiers", 19),  # Grenade and Heavy Armor free
        ("Heavily Armed", 20),  # Rifle 2 -> 1
        ("Mutants", 20),  # speed 1 -> 0, Sword unaffected
        ("Cyborgs", 21),
        ("Unknown Ability", 21),
    ])
    def test_abilities(self, calculator, ability, expected):
        assert calculator.calculate_weirdo_cost(_make_leader(), ability) == expected

    def test_psychic_powers_never_discounted(self, calculator):
        weirdo = _make_leader(psychic_powers=("Telekinesis", "Shield"))
        for ability in (None, "Mutants", "Heavily Armed", "Soldiers"):
            breakdown = calculator.calculate_weirdo_breakdown(weirdo, ability)
            assert breakdown.psychic_powers == 5

    def test_unselected_attributes_cost_nothing(self, calculator):
        weirdo = _make_leader(
            attributes={"speed": 3, "defense": None},
            ranged_weapons=(),
            equipment=(),
            psychic_powers=(),
            close_combat_weapons=("Unarmed",),
        )
        assert calculator.calculate_weirdo_cost(weirdo) == 3

    def test_unknown_equipment_raises(self, calculator):
        with pytest.raises(ReferenceDataError):
            calculator.calculate_weirdo_cost(_make_leader(equipment=("Jetpack",)))

    def test_unknown_attribute_level_raises(self, calculator):
        attributes = dict(_make_leader().attributes, speed=5)
        with pytest.raises(ReferenceDataError):
            calculator.calculate_weirdo_cost(_make_leader(attributes=attributes))

    def test_mutant_trooper_scenario(self, scenario_reference_data):
        calculator = CostCalculator(scenario_reference_data)
        weirdo = _make_mutant_trooper()
        breakdown = calculator.calculate_weirdo_breakdown(weirdo, "Mutants")
        assert breakdown.attribute_total == 18
        assert breakdown.close_combat_weapons == 2
        assert breakdown.total == 20


# ── Warbands ─────────────────────────────────────────────────────────


class TestWarbandCost:
    def _make_warband(self, ability=None):
        return Warband(
            id="wb-1",
            name="Test Band",
            point_limit=75,
            ability=ability,
            weirdos=(_make_leader(), _make_mutant_trooper()),
        )

    def test_sum_of_weirdos(self, calculator):
        # 21 + (18 + Claws & Teeth 2)
        assert calculator.calculate_warband_cost(self._make_warband()) == 41

    def test_ability_applies_to_every_weirdo(self, calculator):
        # 20 + (18 + 1)
        assert calculator.calculate_warband_cost(self._make_warband("Mutants")) == 39

    def test_empty_warband(self, calculator):
        warband = Warband(id="wb-2", name="Empty", point_limit=75)
        assert calculator.calculate_warband_cost(warband) == 0

    def test_idempotent(self, calculator):
        warband = self._make_warband("Soldiers")
        assert calculator.calculate_warband_cost(warband) == calculator.calculate_warband_cost(
            warband
        )
