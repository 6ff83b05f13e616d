"""CSV ingestion for the game catalog files.

Handles the quirks of hand-maintained catalog exports:
- Surrounding quotes and stray whitespace in text cells
- Blank separator rows
- Costs written as text (e.g., " 2 " or "1.0")
- Missing optional columns (notes / effect / description)
"""

import logging
from pathlib import Path

import pandas as pd

from src.reference_data.config import (
    ATTRIBUTE_COLUMNS,
    EQUIPMENT_COLUMNS,
    FILE_PATTERNS,
    NAMED_ENTRY_COLUMNS,
    PSYCHIC_POWER_COLUMNS,
    WEAPON_COLUMNS,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when catalog ingestion fails."""


def _parse_numeric(value):
    """Parse a numeric cell that may be text (e.g., ' 2 ' -> 2.0)."""
    if pd.isna(value):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).strip().strip('"')
    if not s:
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


class CatalogIngester:
    """Reads the catalog CSVs into pandas DataFrames.

    Each read method returns a DataFrame with:
    - Exactly the expected columns (optional text columns filled with "")
    - Text columns stripped of quotes and whitespace
    - Numeric columns parsed as floats (unparseable cells become NaN)
    - Blank rows removed
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _resolve_path(self, file_key: str) -> Path:
        """Build the full file path for a given file key, raising if missing."""
        filepath = self.data_dir / FILE_PATTERNS[file_key]
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    def _read(
        self,
        file_key: str,
        columns: list[str],
        key_col: str,
        numeric_cols: list[str],
    ) -> pd.DataFrame:
        filepath = self._resolve_path(file_key)
        logger.info("Reading %s: %s", file_key, filepath.name)

        # Keep every cell as text; attribute levels like "2" or "None"
        # must not be coerced to numbers / NaN by pandas.
        df = pd.read_csv(
            filepath,
            quotechar='"',
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
        df.columns = [str(c).strip().lower() for c in df.columns]

        if key_col not in df.columns:
            raise ValueError(f"{filepath.name} is missing required column: {key_col}")

        for col in columns:
            if col not in df.columns:
                df[col] = ""
        df = df[columns].copy()

        for col in df.columns:
            df[col] = df[col].astype(str).str.strip().str.strip('"').str.strip()

        df = df[df[key_col] != ""].reset_index(drop=True)

        for col in numeric_cols:
            df[col] = df[col].apply(_parse_numeric)

        logger.info("Loaded %d %s rows", len(df), file_key)
        return df

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------
    def read_attributes(self) -> pd.DataFrame:
        """Read the attribute cost table.

        Returns DataFrame with columns: attribute, level, cost
        """
        return self._read(
            "attributes", ATTRIBUTE_COLUMNS, key_col="attribute", numeric_cols=["cost"]
        )

    # ------------------------------------------------------------------
    # Weapons
    # ------------------------------------------------------------------
    def read_close_combat_weapons(self) -> pd.DataFrame:
        """Read close combat weapons.

        Returns DataFrame with columns: name, max_actions, cost, notes
        """
        return self._read(
            "close_combat_weapons",
            WEAPON_COLUMNS,
            key_col="name",
            numeric_cols=["max_actions", "cost"],
        )

    def read_ranged_weapons(self) -> pd.DataFrame:
        """Read ranged weapons.

        Returns DataFrame with columns: name, max_actions, cost, notes
        """
        return self._read(
            "ranged_weapons",
            WEAPON_COLUMNS,
            key_col="name",
            numeric_cols=["max_actions", "cost"],
        )

    # ------------------------------------------------------------------
    # Equipment / psychic powers
    # ------------------------------------------------------------------
    def read_equipment(self) -> pd.DataFrame:
        """Returns DataFrame with columns: name, type, cost, effect"""
        return self._read(
            "equipment", EQUIPMENT_COLUMNS, key_col="name", numeric_cols=["cost"]
        )

    def read_psychic_powers(self) -> pd.DataFrame:
        """Returns DataFrame with columns: name, type, cost, effect"""
        return self._read(
            "psychic_powers", PSYCHIC_POWER_COLUMNS, key_col="name", numeric_cols=["cost"]
        )

    # ------------------------------------------------------------------
    # Name-only catalogs
    # ------------------------------------------------------------------
    def read_leader_traits(self) -> pd.DataFrame:
        return self._read(
            "leader_traits", NAMED_ENTRY_COLUMNS, key_col="name", numeric_cols=[]
        )

    def read_warband_abilities(self) -> pd.DataFrame:
        return self._read(
            "warband_abilities", NAMED_ENTRY_COLUMNS, key_col="name", numeric_cols=[]
        )

    def read_all(self) -> dict[str, pd.DataFrame]:
        """Read all seven catalog files and return them as a dict.

        Returns:
            dict keyed like FILE_PATTERNS.

        Raises:
            IngestionError: if any file cannot be read.
        """
        try:
            return {
                "attributes": self.read_attributes(),
                "close_combat_weapons": self.read_close_combat_weapons(),
                "ranged_weapons": self.read_ranged_weapons(),
                "equipment": self.read_equipment(),
                "psychic_powers": self.read_psychic_powers(),
                "leader_traits": self.read_leader_traits(),
                "warband_abilities": self.read_warband_abilities(),
            }
        except Exception as e:
            raise IngestionError(f"Failed to read catalog files: {e}") from e
