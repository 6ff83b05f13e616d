"""Data models for warbands, weirdos, and the items they carry."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union


class AttributeType(str, Enum):
    SPEED = "speed"
    DEFENSE = "defense"
    FIREPOWER = "firepower"
    PROWESS = "prowess"
    WILLPOWER = "willpower"


class WeaponType(str, Enum):
    CLOSE = "close"
    RANGED = "ranged"


class WeirdoType(str, Enum):
    LEADER = "leader"
    TROOPER = "trooper"


class WarbandAbility(str, Enum):
    CYBORGS = "Cyborgs"
    FANATICS = "Fanatics"
    LIVING_WEAPONS = "Living Weapons"
    HEAVILY_ARMED = "Heavily Armed"
    MUTANTS = "Mutants"
    SOLDIERS = "Soldiers"
    UNDEAD = "Undead"


class LeaderTrait(str, Enum):
    BOUNTY_HUNTER = "Bounty Hunter"
    HEALER = "Healer"
    MAJESTIC = "Majestic"
    MONSTROUS = "Monstrous"
    POLITICAL_OFFICER = "Political Officer"
    SORCERER = "Sorcerer"
    TACTICIAN = "Tactician"


# Ordered level enumerations per attribute (lowest first)
SPEED_LEVELS = ("1", "2", "3")
DICE_LEVELS = ("2d6", "2d8", "2d10")
FIREPOWER_LEVELS = ("None", "2d8", "2d10")

ATTRIBUTE_LEVELS: Dict[str, Tuple[str, ...]] = {
    AttributeType.SPEED.value: SPEED_LEVELS,
    AttributeType.DEFENSE.value: DICE_LEVELS,
    AttributeType.FIREPOWER.value: FIREPOWER_LEVELS,
    AttributeType.PROWESS.value: DICE_LEVELS,
    AttributeType.WILLPOWER.value: DICE_LEVELS,
}

AttributeLevel = Union[int, str]


def level_key(level: AttributeLevel) -> str:
    """Canonical string form of an attribute level (speed 2 -> "2")."""
    return str(level)


@dataclass(frozen=True)
class Weapon:
    """A catalog weapon. Discounts match on ``name``, never identity."""

    name: str
    weapon_type: str  # "close" or "ranged"
    base_cost: int
    max_actions: int = 0
    notes: str = ""


@dataclass(frozen=True)
class Equipment:
    """A catalog equipment item."""

    name: str
    base_cost: int
    equipment_type: str = "Passive"  # "Passive" or "Action"
    effect: str = ""


@dataclass(frozen=True)
class PsychicPower:
    """A catalog psychic power. Fixed cost, no ability discounts."""

    name: str
    cost: int
    power_type: str = "Attack"  # "Attack", "Effect" or "Either"
    effect: str = ""


@dataclass(frozen=True)
class Weirdo:
    """A single character snapshot.

    ``attributes`` maps an attribute type value ("speed", ...) to its
    selected level. A missing key or a ``None`` value means the attribute
    is unselected. The mapping is copied into a read-only view and left
    out of the hash. Weapons, equipment and psychic powers are referenced
    by catalog name.
    """

    id: str
    name: str
    weirdo_type: str  # "leader" or "trooper"
    attributes: Mapping[str, Optional[AttributeLevel]] = field(
        default_factory=dict, hash=False
    )
    close_combat_weapons: Tuple[str, ...] = ()
    ranged_weapons: Tuple[str, ...] = ()
    equipment: Tuple[str, ...] = ()
    psychic_powers: Tuple[str, ...] = ()
    leader_trait: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def is_leader(self) -> bool:
        return self.weirdo_type == WeirdoType.LEADER

    @property
    def is_trooper(self) -> bool:
        return self.weirdo_type == WeirdoType.TROOPER

    def get_attribute(self, attribute_type: str) -> Optional[AttributeLevel]:
        """Selected level for *attribute_type*, or None if unselected."""
        return self.attributes.get(AttributeType(attribute_type).value)

    def selected_attributes(self) -> Dict[str, AttributeLevel]:
        """Selected attributes in canonical type order, skipping unselected ones."""
        selected = {}
        for attribute_type in AttributeType:
            level = self.attributes.get(attribute_type.value)
            if level not in (None, ""):
                selected[attribute_type.value] = level
        return selected


@dataclass(frozen=True)
class Warband:
    """A roster snapshot. ``weirdos`` order decides the special-slot tie-break."""

    id: str
    name: str
    point_limit: int
    ability: Optional[str] = None
    weirdos: Tuple[Weirdo, ...] = ()
