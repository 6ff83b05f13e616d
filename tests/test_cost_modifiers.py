"""Tests for warband ability cost modifier strategies."""

import pytest

from src.cost_engine.cost_modifiers import (
    DefaultCostStrategy,
    HeavilyArmedCostStrategy,
    MutantsCostStrategy,
    SoldiersCostStrategy,
    create_cost_modifier_strategy,
)
from src.cost_engine.models import (
    AttributeType,
    Equipment,
    WarbandAbility,
    Weapon,
    WeaponType,
)

_ALL_STRATEGIES = [
    DefaultCostStrategy(),
    MutantsCostStrategy(),
    HeavilyArmedCostStrategy(),
    SoldiersCostStrategy(),
]


def _make_weapon(name="Sword", weapon_type=WeaponType.CLOSE, base_cost=1):
    return Weapon(name=name, weapon_type=weapon_type.value, base_cost=base_cost)


def _make_equipment(name="Jump Pack", base_cost=1):
    return Equipment(name=name, base_cost=base_cost)


# ── Factory ──────────────────────────────────────────────────────────


class TestCreateStrategy:
    def test_none_is_default(self):
        assert isinstance(create_cost_modifier_strategy(None), DefaultCostStrategy)

    @pytest.mark.parametrize("ability, expected", [
        ("Mutants", MutantsCostStrategy),
        ("Heavily Armed", HeavilyArmedCostStrategy),
        ("Soldiers", SoldiersCostStrategy),
        (WarbandAbility.MUTANTS, MutantsCostStrategy),
    ])
    def test_cost_abilities(self, ability, expected):
        assert isinstance(create_cost_modifier_strategy(ability), expected)

    @pytest.mark.parametrize("ability", ["Cyborgs", "Fanatics", "Living Weapons", "Undead"])
    def test_abilities_without_cost_effects(self, ability):
        assert isinstance(create_cost_modifier_strategy(ability), DefaultCostStrategy)

    def test_unrecognized_ability_defaults(self):
        assert isinstance(create_cost_modifier_strategy("Psykers"), DefaultCostStrategy)

    def test_same_instance_each_call(self):
        assert create_cost_modifier_strategy("Mutants") is create_cost_modifier_strategy(
            "Mutants"
        )


# ── Properties shared by every strategy ──────────────────────────────


class TestNonNegative:
    @pytest.mark.parametrize("strategy", _ALL_STRATEGIES, ids=repr)
    @pytest.mark.parametrize("base_cost", [0, 1, 2, 5])
    def test_weapons(self, strategy, base_cost):
        for name in ("Claws & Teeth", "Whip/Tail", "Sword"):
            for weapon_type in WeaponType:
                weapon = _make_weapon(name, weapon_type, base_cost)
                assert strategy.apply_weapon_discount(weapon) >= 0

    @pytest.mark.parametrize("strategy", _ALL_STRATEGIES, ids=repr)
    @pytest.mark.parametrize("base_cost", [0, 1, 2])
    def test_equipment_and_attributes(self, strategy, base_cost):
        for name in ("Grenade", "Medkit", "Jump Pack"):
            assert strategy.apply_equipment_discount(_make_equipment(name, base_cost)) >= 0
        for attribute_type in AttributeType:
            assert strategy.apply_attribute_discount(attribute_type, "2d6", base_cost) >= 0


class TestDefaultStrategy:
    def test_identity(self):
        strategy = DefaultCostStrategy()
        assert strategy.apply_weapon_discount(_make_weapon("Claws & Teeth", base_cost=3)) == 3
        assert strategy.apply_weapon_discount(
            _make_weapon("Rifle", WeaponType.RANGED, 2)
        ) == 2
        assert strategy.apply_equipment_discount(_make_equipment("Grenade", 1)) == 1
        assert strategy.apply_attribute_discount("speed", 3, 3) == 3


# ── Ability-specific strategies ──────────────────────────────────────


class TestMutants:
    strategy = MutantsCostStrategy()

    def test_speed_discounted(self):
        assert self.strategy.apply_attribute_discount("speed", 3, 3) == 2
        assert self.strategy.apply_attribute_discount(AttributeType.SPEED, 2, 1) == 0

    def test_speed_clamped(self):
        assert self.strategy.apply_attribute_discount("speed", 1, 0) == 0

    def test_other_attributes_unchanged(self):
        for attribute_type in ("defense", "firepower", "prowess", "willpower"):
            assert self.strategy.apply_attribute_discount(attribute_type, "2d8", 4) == 4

    @pytest.mark.parametrize("name", ["Claws & Teeth", "Horrible Claws & Teeth", "Whip/Tail"])
    def test_natural_weapons_discounted(self, name):
        assert self.strategy.apply_weapon_discount(_make_weapon(name, base_cost=3)) == 2

    def test_natural_weapon_clamped(self):
        assert self.strategy.apply_weapon_discount(_make_weapon("Whip/Tail", base_cost=0)) == 0

    def test_other_close_weapon_unchanged(self):
        assert self.strategy.apply_weapon_discount(_make_weapon("Axe", base_cost=3)) == 3

    def test_ranged_weapon_with_natural_name_unchanged(self):
        weapon = _make_weapon("Claws & Teeth", WeaponType.RANGED, 3)
        assert self.strategy.apply_weapon_discount(weapon) == 3

    def test_equipment_unchanged(self):
        assert self.strategy.apply_equipment_discount(_make_equipment("Grenade", 1)) == 1


class TestHeavilyArmed:
    strategy = HeavilyArmedCostStrategy()

    def test_ranged_discounted(self):
        assert self.strategy.apply_weapon_discount(
            _make_weapon("Blaster", WeaponType.RANGED, 5)
        ) == 4

    def test_ranged_clamped(self):
        assert self.strategy.apply_weapon_discount(
            _make_weapon("Auto Pistol", WeaponType.RANGED, 0)
        ) == 0

    @pytest.mark.parametrize("name", ["Claws & Teeth", "Axe", "Rifle"])
    def test_close_never_discounted(self, name):
        assert self.strategy.apply_weapon_discount(_make_weapon(name, base_cost=3)) == 3

    def test_attributes_unchanged(self):
        assert self.strategy.apply_attribute_discount("speed", 3, 3) == 3


class TestSoldiers:
    strategy = SoldiersCostStrategy()

    @pytest.mark.parametrize("name", ["Grenade", "Heavy Armor", "Medkit"])
    @pytest.mark.parametrize("base_cost", [0, 1, 4])
    def test_free_equipment(self, name, base_cost):
        assert self.strategy.apply_equipment_discount(_make_equipment(name, base_cost)) == 0

    def test_other_equipment_unchanged(self):
        assert self.strategy.apply_equipment_discount(
            _make_equipment("Psychic Dampener", 2)
        ) == 2

    def test_weapons_unchanged(self):
        assert self.strategy.apply_weapon_discount(
            _make_weapon("Rifle", WeaponType.RANGED, 2)
        ) == 2
