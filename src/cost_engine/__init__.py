from src.cost_engine.cost_calculator import CostCalculator, WeirdoCostBreakdown
from src.cost_engine.cost_modifiers import (
    CostModifierStrategy,
    DefaultCostStrategy,
    HeavilyArmedCostStrategy,
    MutantsCostStrategy,
    SoldiersCostStrategy,
    create_cost_modifier_strategy,
)
from src.cost_engine.models import (
    AttributeType,
    Equipment,
    LeaderTrait,
    PsychicPower,
    Warband,
    WarbandAbility,
    Weapon,
    WeaponType,
    Weirdo,
    WeirdoType,
)

__all__ = [
    "AttributeType",
    "CostCalculator",
    "CostModifierStrategy",
    "DefaultCostStrategy",
    "Equipment",
    "HeavilyArmedCostStrategy",
    "LeaderTrait",
    "MutantsCostStrategy",
    "PsychicPower",
    "SoldiersCostStrategy",
    "Warband",
    "WarbandAbility",
    "Weapon",
    "WeaponType",
    "Weirdo",
    "WeirdoType",
    "WeirdoCostBreakdown",
    "create_cost_modifier_strategy",
]
