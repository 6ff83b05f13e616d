"""Data cleaning for the catalog CSVs.

Handles standardization across the catalog files:
- Normalize item names (curly quotes, dash variants, whitespace)
- Canonicalize attribute types and levels ("2D8" -> "2d8", "none" -> "None")
- Coerce costs to non-negative integers, dropping unusable rows
- Validate type tags and drop duplicate names
"""

import logging
import re
from typing import Optional

import pandas as pd

from src.cost_engine.models import ATTRIBUTE_LEVELS
from src.reference_data.config import EQUIPMENT_TYPES, PSYCHIC_POWER_TYPES

logger = logging.getLogger(__name__)

# Regex: dice notation such as 2d6 / 2D10
_DICE_PATTERN = re.compile(r"^(\d+)[dD](\d+)$")

# Speed levels may be exported as floats ("2.0")
_INTEGER_PATTERN = re.compile(r"^(\d+)(?:\.0+)?$")


class CatalogCleaner:
    """Cleans and standardizes catalog DataFrames."""

    # ------------------------------------------------------------------
    # Name normalization
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_item_name(name: str) -> Optional[str]:
        """Normalize an item name for consistent lookups.

        - Strips quotes and extra whitespace
        - Standardizes apostrophes and hyphens
        - Keeps "&" and "/" (e.g. "Claws & Teeth", "Whip/Tail")
        """
        if pd.isna(name):
            return None

        name = str(name).strip().strip('"')
        if name == "":
            return None

        # Standardize apostrophe variants to ASCII straight quote
        name = name.replace("\u2019", "'")
        name = name.replace("\u2018", "'")
        name = name.replace("\u02BC", "'")

        # Standardize dash variants to ASCII hyphen-minus
        name = name.replace("\u2013", "-")
        name = name.replace("\u2014", "-")

        # Collapse whitespace
        name = " ".join(name.split())

        return name

    # ------------------------------------------------------------------
    # Attribute helpers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_attribute_type(value: str) -> Optional[str]:
        """Lower-case an attribute type, returning None if it is unknown."""
        if pd.isna(value):
            return None
        attribute = str(value).strip().lower()
        return attribute if attribute in ATTRIBUTE_LEVELS else None

    @staticmethod
    def normalize_attribute_level(value: str) -> Optional[str]:
        """Canonicalize an attribute level.

        Examples:
            "2D8"  -> "2d8"
            "none" -> "None"
            "2.0"  -> "2"
            ""     -> None
        """
        if pd.isna(value):
            return None
        level = str(value).strip()
        if level == "":
            return None
        if level.lower() == "none":
            return "None"

        m = _DICE_PATTERN.match(level)
        if m:
            return f"{int(m.group(1))}d{int(m.group(2))}"

        m = _INTEGER_PATTERN.match(level)
        if m:
            return str(int(m.group(1)))

        return level

    @staticmethod
    def normalize_type_tag(value: str, allowed: set) -> Optional[str]:
        """Match a type tag case-insensitively against *allowed*."""
        if pd.isna(value):
            return None
        tag = str(value).strip().lower()
        for candidate in allowed:
            if candidate.lower() == tag:
                return candidate
        return None

    # ------------------------------------------------------------------
    # Shared row filters
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_costs(df: pd.DataFrame, label: str) -> pd.DataFrame:
        """Drop rows with missing or negative costs and cast cost to int."""
        bad = df["cost"].isna() | (df["cost"] < 0)
        if bad.any():
            logger.warning(
                "Dropping %d %s rows with missing or negative cost: %s",
                bad.sum(),
                label,
                df.loc[bad, df.columns[0]].tolist(),
            )
            df = df[~bad]
        df = df.copy()
        df["cost"] = df["cost"].round().astype(int)
        return df.reset_index(drop=True)

    @staticmethod
    def _drop_duplicates(df: pd.DataFrame, keys: list[str], label: str) -> pd.DataFrame:
        dupes = df.duplicated(subset=keys, keep="first")
        if dupes.any():
            logger.warning(
                "Dropping %d duplicate %s rows: %s",
                dupes.sum(),
                label,
                df.loc[dupes, keys[-1]].tolist(),
            )
            df = df[~dupes]
        return df.reset_index(drop=True)

    def _clean_named(self, df: pd.DataFrame, label: str) -> pd.DataFrame:
        out = df.copy()
        out["name"] = out["name"].apply(self.normalize_item_name)
        out = out[out["name"].notna()]
        return self._drop_duplicates(out, ["name"], label)

    def _clean_typed(
        self, df: pd.DataFrame, allowed: set, label: str
    ) -> pd.DataFrame:
        out = self._clean_named(df, label)
        out["type"] = out["type"].apply(lambda t: self.normalize_type_tag(t, allowed))
        unknown = out["type"].isna()
        if unknown.any():
            logger.warning(
                "Dropping %d %s rows with unknown type: %s",
                unknown.sum(),
                label,
                out.loc[unknown, "name"].tolist(),
            )
            out = out[~unknown]
        return self._coerce_costs(out, label)

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def clean_attributes(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the attribute table. Rows with unknown type/level are dropped."""
        out = df.copy()
        out["attribute"] = out["attribute"].apply(self.normalize_attribute_type)
        out["level"] = out["level"].apply(self.normalize_attribute_level)

        known = pd.Series(
            [
                pd.notna(attribute)
                and pd.notna(level)
                and attribute in ATTRIBUTE_LEVELS
                and level in ATTRIBUTE_LEVELS[attribute]
                for attribute, level in zip(out["attribute"], out["level"])
            ],
            index=out.index,
            dtype=bool,
        )
        if (~known).any():
            logger.warning(
                "Dropping %d attribute rows with unknown type or level", (~known).sum()
            )
            out = out[known]

        out = self._drop_duplicates(out, ["attribute", "level"], "attribute")
        out = self._coerce_costs(out, "attribute")
        logger.info("Cleaned attributes: %d rows", len(out))
        return out

    def clean_weapons(self, df: pd.DataFrame, label: str = "weapon") -> pd.DataFrame:
        """Clean a weapon table. max_actions defaults to 0 when blank."""
        out = self._clean_named(df, label)
        out["max_actions"] = out["max_actions"].fillna(0).round().astype(int)
        out = self._coerce_costs(out, label)
        logger.info("Cleaned %s: %d rows", label, len(out))
        return out

    def clean_equipment(self, df: pd.DataFrame) -> pd.DataFrame:
        out = self._clean_typed(df, EQUIPMENT_TYPES, "equipment")
        logger.info("Cleaned equipment: %d rows", len(out))
        return out

    def clean_psychic_powers(self, df: pd.DataFrame) -> pd.DataFrame:
        out = self._clean_typed(df, PSYCHIC_POWER_TYPES, "psychic power")
        logger.info("Cleaned psychic powers: %d rows", len(out))
        return out

    def clean_named_entries(self, df: pd.DataFrame, label: str) -> pd.DataFrame:
        out = self._clean_named(df, label)
        logger.info("Cleaned %s: %d rows", label, len(out))
        return out

    def clean_all(
        self, data: dict[str, pd.DataFrame]
    ) -> dict[str, pd.DataFrame]:
        """Clean all DataFrames returned by CatalogIngester.read_all().

        Returns a dict with the same keys, each cleaned.
        """
        return {
            "attributes": self.clean_attributes(data["attributes"]),
            "close_combat_weapons": self.clean_weapons(
                data["close_combat_weapons"], "close combat weapons"
            ),
            "ranged_weapons": self.clean_weapons(
                data["ranged_weapons"], "ranged weapons"
            ),
            "equipment": self.clean_equipment(data["equipment"]),
            "psychic_powers": self.clean_psychic_powers(data["psychic_powers"]),
            "leader_traits": self.clean_named_entries(
                data["leader_traits"], "leader traits"
            ),
            "warband_abilities": self.clean_named_entries(
                data["warband_abilities"], "warband abilities"
            ),
        }
