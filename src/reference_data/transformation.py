"""Catalog transformation.

Turns the cleaned catalog DataFrames into the JSON-serializable catalog
dict consumed by ReferenceData:
- Pivots the attribute table into {type: {level: cost}}
- Groups weapons by type tag (close / ranged)
- Flattens equipment, psychic powers and name-only catalogs
"""

import logging

import pandas as pd

from src.cost_engine.models import ATTRIBUTE_LEVELS
from src.reference_data.repository import ReferenceDataError

logger = logging.getLogger(__name__)

# Keys expected in the cleaned data dict passed to transform()
_REQUIRED_KEYS = {
    "attributes",
    "close_combat_weapons",
    "ranged_weapons",
    "equipment",
    "psychic_powers",
    "leader_traits",
    "warband_abilities",
}


class CatalogTransformer:
    """Builds the processed catalog dict from cleaned DataFrames."""

    def build_attribute_table(self, df: pd.DataFrame) -> dict[str, dict[str, int]]:
        """Pivot attribute rows into {type: {level: cost}} in enumeration order.

        Raises:
            ReferenceDataError: if any (type, level) pair is missing.
        """
        costs = {
            (row.attribute, row.level): int(row.cost)
            for row in df.itertuples(index=False)
        }

        table: dict[str, dict[str, int]] = {}
        missing = []
        for attribute, levels in ATTRIBUTE_LEVELS.items():
            table[attribute] = {}
            for level in levels:
                if (attribute, level) not in costs:
                    missing.append(f"{attribute}={level}")
                    continue
                table[attribute][level] = costs[(attribute, level)]

        if missing:
            raise ReferenceDataError(
                f"Attribute catalog is missing levels: {', '.join(missing)}"
            )
        return table

    @staticmethod
    def _weapon_records(df: pd.DataFrame) -> list[dict]:
        return [
            {
                "name": row.name,
                "base_cost": int(row.cost),
                "max_actions": int(row.max_actions),
                "notes": row.notes,
            }
            for row in df.itertuples(index=False)
        ]

    @staticmethod
    def _typed_records(df: pd.DataFrame, cost_key: str) -> list[dict]:
        return [
            {
                "name": row.name,
                "type": row.type,
                cost_key: int(row.cost),
                "effect": row.effect,
            }
            for row in df.itertuples(index=False)
        ]

    def transform(self, cleaned: dict[str, pd.DataFrame]) -> dict:
        """Full transformation: cleaned DataFrames -> catalog dict.

        Args:
            cleaned: Output of CatalogCleaner.clean_all().

        Returns:
            Catalog dict accepted by ReferenceData.from_dict().

        Raises:
            ValueError: if the cleaned dict is missing a catalog.
            ReferenceDataError: if the attribute table is incomplete.
        """
        missing = _REQUIRED_KEYS - set(cleaned.keys())
        if missing:
            raise ValueError(f"Cleaned data missing required keys: {missing}")

        catalog = {
            "attributes": self.build_attribute_table(cleaned["attributes"]),
            "weapons": {
                "close": self._weapon_records(cleaned["close_combat_weapons"]),
                "ranged": self._weapon_records(cleaned["ranged_weapons"]),
            },
            "equipment": self._typed_records(cleaned["equipment"], "base_cost"),
            "psychic_powers": self._typed_records(cleaned["psychic_powers"], "cost"),
            "leader_traits": cleaned["leader_traits"]["name"].tolist(),
            "warband_abilities": cleaned["warband_abilities"]["name"].tolist(),
        }

        logger.info(
            "Transformed catalog: %d close, %d ranged, %d equipment, %d psychic powers",
            len(catalog["weapons"]["close"]),
            len(catalog["weapons"]["ranged"]),
            len(catalog["equipment"]),
            len(catalog["psychic_powers"]),
        )
        return catalog
