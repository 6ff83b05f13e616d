"""Read-only reference data provider.

Serves the processed game catalog (attribute cost table, weapons,
equipment, psychic powers, leader traits, warband abilities) to the cost
engine. Lookups are total over the catalog: an unknown key raises
ReferenceDataError instead of returning a default cost.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from src.cost_engine.models import (
    ATTRIBUTE_LEVELS,
    AttributeLevel,
    AttributeType,
    Equipment,
    PsychicPower,
    Weapon,
    WeaponType,
    level_key,
)
from src.reference_data.config import PROCESSED_DATA_DIR, PROCESSED_FILENAME

logger = logging.getLogger(__name__)


class ReferenceDataError(Exception):
    """Raised when a catalog lookup misses or the catalog itself is broken.

    This is a data-integrity error, distinct from warband validation
    failures: it means an upstream invariant is broken.
    """


class ReferenceData:
    """Immutable lookup tables built from a catalog dict.

    The catalog dict is the structure written by ``run_update``::

        {
            "attributes": {"speed": {"1": 0, ...}, ...},
            "weapons": {"close": [{...}], "ranged": [{...}]},
            "equipment": [{...}],
            "psychic_powers": [{...}],
            "leader_traits": ["Bounty Hunter", ...],
            "warband_abilities": ["Cyborgs", ...],
        }
    """

    def __init__(
        self,
        attribute_costs: Dict[str, Dict[str, int]],
        weapons: List[Weapon],
        equipment: List[Equipment],
        psychic_powers: List[PsychicPower],
        leader_traits: List[str],
        warband_abilities: List[str],
    ):
        self._attribute_costs = {
            attribute: dict(levels) for attribute, levels in attribute_costs.items()
        }
        self._weapons: Dict[Tuple[str, str], Weapon] = {
            (w.weapon_type, w.name): w for w in weapons
        }
        self._equipment = {e.name: e for e in equipment}
        self._psychic_powers = {p.name: p for p in psychic_powers}
        self._leader_traits = tuple(leader_traits)
        self._warband_abilities = tuple(warband_abilities)

        self._check_attribute_table()

    def _check_attribute_table(self):
        """Every (type, level) pair of the fixed enumerations must be costed."""
        missing = [
            f"{attribute}={level}"
            for attribute, levels in ATTRIBUTE_LEVELS.items()
            for level in levels
            if level not in self._attribute_costs.get(attribute, {})
        ]
        if missing:
            raise ReferenceDataError(
                f"Attribute cost table incomplete, missing: {', '.join(missing)}"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, catalog: Dict) -> "ReferenceData":
        """Build lookup tables from a processed catalog dict."""
        try:
            weapons = [
                Weapon(
                    name=w["name"],
                    weapon_type=weapon_type,
                    base_cost=int(w["base_cost"]),
                    max_actions=int(w.get("max_actions", 0)),
                    notes=w.get("notes", ""),
                )
                for weapon_type in (WeaponType.CLOSE.value, WeaponType.RANGED.value)
                for w in catalog["weapons"].get(weapon_type, [])
            ]
            equipment = [
                Equipment(
                    name=e["name"],
                    base_cost=int(e["base_cost"]),
                    equipment_type=e.get("type", "Passive"),
                    effect=e.get("effect", ""),
                )
                for e in catalog["equipment"]
            ]
            psychic_powers = [
                PsychicPower(
                    name=p["name"],
                    cost=int(p["cost"]),
                    power_type=p.get("type", "Attack"),
                    effect=p.get("effect", ""),
                )
                for p in catalog.get("psychic_powers", [])
            ]
            attribute_costs = {
                attribute: {level_key(level): int(cost) for level, cost in levels.items()}
                for attribute, levels in catalog["attributes"].items()
            }
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed reference catalog: {e!r}") from e

        return cls(
            attribute_costs=attribute_costs,
            weapons=weapons,
            equipment=equipment,
            psychic_powers=psychic_powers,
            leader_traits=list(catalog.get("leader_traits", [])),
            warband_abilities=list(catalog.get("warband_abilities", [])),
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def lookup_attribute_cost(self, attribute_type: str, level: AttributeLevel) -> int:
        """Base cost of *attribute_type* at *level*."""
        attribute = (
            attribute_type.value
            if isinstance(attribute_type, AttributeType)
            else str(attribute_type)
        )
        try:
            return self._attribute_costs[attribute][level_key(level)]
        except KeyError:
            raise ReferenceDataError(
                f"No cost for attribute {attribute!r} at level {level!r}"
            ) from None

    def lookup_weapon(self, name: str, weapon_type: str) -> Weapon:
        try:
            return self._weapons[(WeaponType(weapon_type).value, name)]
        except (KeyError, ValueError):
            raise ReferenceDataError(
                f"Unknown {weapon_type} weapon: {name!r}"
            ) from None

    def lookup_weapon_cost(self, name: str, weapon_type: str) -> int:
        return self.lookup_weapon(name, weapon_type).base_cost

    def lookup_equipment(self, name: str) -> Equipment:
        try:
            return self._equipment[name]
        except KeyError:
            raise ReferenceDataError(f"Unknown equipment: {name!r}") from None

    def lookup_equipment_cost(self, name: str) -> int:
        return self.lookup_equipment(name).base_cost

    def lookup_psychic_power(self, name: str) -> PsychicPower:
        try:
            return self._psychic_powers[name]
        except KeyError:
            raise ReferenceDataError(f"Unknown psychic power: {name!r}") from None

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    def weapons(self, weapon_type: str) -> List[Weapon]:
        """All weapons of *weapon_type*, in catalog order."""
        wanted = WeaponType(weapon_type).value
        return [w for (kind, _), w in self._weapons.items() if kind == wanted]

    def equipment(self) -> List[Equipment]:
        return list(self._equipment.values())

    def psychic_powers(self) -> List[PsychicPower]:
        return list(self._psychic_powers.values())

    @property
    def leader_traits(self) -> Tuple[str, ...]:
        return self._leader_traits

    @property
    def warband_abilities(self) -> Tuple[str, ...]:
        return self._warband_abilities


def load_reference_data(path: Optional[Path] = None) -> ReferenceData:
    """Load the processed catalog JSON written by ``run_update``."""
    catalog_file = Path(path) if path is not None else PROCESSED_DATA_DIR / PROCESSED_FILENAME

    if not catalog_file.exists():
        raise FileNotFoundError(
            f"No reference data found at {catalog_file}. "
            "Run data pipeline first: "
            "python -m src.reference_data.run_update"
        )

    with open(catalog_file, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        catalog = data["catalog"]
    except KeyError as e:
        raise ValueError(
            f"Malformed reference data file {catalog_file}: missing key {e}. "
            "Re-run data pipeline to regenerate."
        ) from e

    reference_data = ReferenceData.from_dict(catalog)
    logger.info(
        "Loaded reference data from %s (%d close, %d ranged, %d equipment)",
        catalog_file,
        len(reference_data.weapons(WeaponType.CLOSE)),
        len(reference_data.weapons(WeaponType.RANGED)),
        len(reference_data.equipment()),
    )
    return reference_data
