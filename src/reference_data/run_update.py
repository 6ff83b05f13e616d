"""Run the complete catalog pipeline.

Usage:
    python -m src.reference_data.run_update [data_dir] [output_dir]

Examples:
    python -m src.reference_data.run_update
    python -m src.reference_data.run_update /path/to/csvs /tmp/processed
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from src.logging_config import setup_logging
from src.reference_data.cleaning import CatalogCleaner
from src.reference_data.config import (
    CATALOG_VERSION,
    PROCESSED_DATA_DIR,
    PROCESSED_FILENAME,
    RAW_DATA_DIR,
)
from src.reference_data.ingestion import CatalogIngester
from src.reference_data.repository import ReferenceData
from src.reference_data.transformation import CatalogTransformer

logger = logging.getLogger(__name__)


def build_catalog(data_dir: Path | None = None) -> dict:
    """Ingest, clean and transform the raw CSVs into a catalog dict."""
    if data_dir is None:
        data_dir = RAW_DATA_DIR

    if not Path(data_dir).is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    raw = CatalogIngester(data_dir).read_all()
    cleaned = CatalogCleaner().clean_all(raw)
    return CatalogTransformer().transform(cleaned)


def build_reference_data(data_dir: Path | None = None) -> ReferenceData:
    """Run the pipeline in memory and return the lookup provider."""
    return ReferenceData.from_dict(build_catalog(data_dir))


def run_pipeline(
    data_dir: Path | None = None,
    output_dir: Path | None = None,
) -> Path:
    """Run the complete catalog pipeline.

    Args:
        data_dir: Directory containing the raw catalog CSVs.
            Defaults to ``data/raw/``.
        output_dir: Directory for JSON output.
            Defaults to ``data/processed/``.

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
        ReferenceDataError: If the resulting catalog is not total.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR

    logger.info("Starting catalog pipeline (data: %s)", data_dir)

    # 1. Ingest, clean, transform
    logger.info("Step 1/2: Building catalog from CSV files...")
    catalog = build_catalog(data_dir)

    # Building the provider checks the catalog is total before it is written
    ReferenceData.from_dict(catalog)

    # 2. Output JSON
    logger.info("Step 2/2: Generating JSON output...")
    output_data = {
        "metadata": {
            "version": CATALOG_VERSION,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": str(data_dir),
            "counts": {
                "close_combat_weapons": len(catalog["weapons"]["close"]),
                "ranged_weapons": len(catalog["weapons"]["ranged"]),
                "equipment": len(catalog["equipment"]),
                "psychic_powers": len(catalog["psychic_powers"]),
                "leader_traits": len(catalog["leader_traits"]),
                "warband_abilities": len(catalog["warband_abilities"]),
            },
        },
        "catalog": catalog,
    }

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / PROCESSED_FILENAME

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2)

    logger.info("Pipeline complete! Output: %s", output_file)
    logger.info(
        "  Counts: %s",
        ", ".join(f"{k}={v}" for k, v in output_data["metadata"]["counts"].items()),
    )

    return output_file


if __name__ == "__main__":
    setup_logging()

    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_pipeline(data_dir, output_dir)
        print(f"Pipeline complete: {output}")
    except Exception:
        logger.exception("Pipeline failed")
        sys.exit(1)
