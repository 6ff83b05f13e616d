from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"

# Processed catalog written by run_update
PROCESSED_FILENAME = "reference_data.json"
CATALOG_VERSION = "1.0"

# Catalog CSV file names
FILE_PATTERNS = {
    "attributes": "attributes.csv",
    "close_combat_weapons": "close_combat_weapons.csv",
    "ranged_weapons": "ranged_weapons.csv",
    "equipment": "equipment.csv",
    "psychic_powers": "psychic_powers.csv",
    "leader_traits": "leader_traits.csv",
    "warband_abilities": "warband_abilities.csv",
}

# Expected columns per catalog file
ATTRIBUTE_COLUMNS = ["attribute", "level", "cost"]
WEAPON_COLUMNS = ["name", "max_actions", "cost", "notes"]
EQUIPMENT_COLUMNS = ["name", "type", "cost", "effect"]
PSYCHIC_POWER_COLUMNS = ["name", "type", "cost", "effect"]
NAMED_ENTRY_COLUMNS = ["name", "description"]

# Allowed type tags
EQUIPMENT_TYPES = {"Passive", "Action"}
PSYCHIC_POWER_TYPES = {"Attack", "Effect", "Either"}
