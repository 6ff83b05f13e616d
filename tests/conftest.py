"""Shared fixtures for the warband builder test suite."""

import copy

import pytest

from src.cost_engine.cost_calculator import CostCalculator
from src.reference_data.cleaning import CatalogCleaner
from src.reference_data.config import RAW_DATA_DIR
from src.reference_data.ingestion import CatalogIngester
from src.reference_data.repository import ReferenceData
from src.reference_data.transformation import CatalogTransformer
from src.warband_manager.validation_engine import ValidationEngine


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def cleaner():
    return CatalogCleaner()


@pytest.fixture(scope="module")
def transformer():
    return CatalogTransformer()


# ------------------------------------------------------------------
# Catalog fixtures – read the bundled CSVs once per module
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def ingester():
    """Ingester pointing at the bundled data/raw catalog."""
    return CatalogIngester(RAW_DATA_DIR)


@pytest.fixture(scope="module")
def raw_data(ingester):
    return ingester.read_all()


@pytest.fixture(scope="module")
def cleaned_data(raw_data, cleaner):
    return cleaner.clean_all(raw_data)


@pytest.fixture(scope="module")
def catalog(transformer, cleaned_data):
    """Processed catalog dict built from the bundled CSVs."""
    return transformer.transform(cleaned_data)


@pytest.fixture(scope="module")
def reference_data(catalog):
    return ReferenceData.from_dict(catalog)


@pytest.fixture(scope="module")
def calculator(reference_data):
    return CostCalculator(reference_data)


@pytest.fixture(scope="module")
def engine(reference_data):
    return ValidationEngine(reference_data)


@pytest.fixture(scope="module")
def scenario_reference_data(catalog):
    """Bundled catalog with Claws & Teeth priced at 3 points."""
    patched = copy.deepcopy(catalog)
    for weapon in patched["weapons"]["close"]:
        if weapon["name"] == "Claws & Teeth":
            weapon["base_cost"] = 3
    return ReferenceData.from_dict(patched)
