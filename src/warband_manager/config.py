from src.cost_engine.models import WarbandAbility

# Legal warband point limits
STANDARD_POINT_LIMIT = 75
EXTENDED_POINT_LIMIT = 125
VALID_POINT_LIMITS = (STANDARD_POINT_LIMIT, EXTENDED_POINT_LIMIT)

# Warn when the warband total reaches this share of its point limit
POINT_LIMIT_WARNING_THRESHOLD = 0.9

# Trooper point caps
TROOPER_STANDARD_LIMIT = 20  # every trooper while another weirdo holds the special slot
TROOPER_MAXIMUM_LIMIT = 25  # absolute cap for any trooper
SPECIAL_SLOT_MIN = 21
SPECIAL_SLOT_MAX = 25

# Warn when a trooper is this many points (or fewer) under its cap
COST_WARNING_MARGIN = 3

# Equipment limits by weirdo type, standard vs. Cyborgs warbands
EQUIPMENT_LIMITS = {
    "leader": {"standard": 2, "cyborgs": 3},
    "trooper": {"standard": 1, "cyborgs": 2},
}
EXPANDED_EQUIPMENT_ABILITY = WarbandAbility.CYBORGS

# Firepower levels that allow (and require) a ranged weapon
QUALIFYING_FIREPOWER_LEVELS = ("2d8", "2d10")

# Message templates by failure / warning code. Interpolation values are
# kept on the failure itself so callers can render their own text.
VALIDATION_MESSAGES = {
    "WARBAND_NAME_REQUIRED": "Warband name is required",
    "WEIRDO_NAME_REQUIRED": "Weirdo name is required",
    "INVALID_POINT_LIMIT": "Point limit must be 75 or 125 (got {point_limit})",
    "ATTRIBUTES_INCOMPLETE": "All five attributes must be selected (missing: {missing})",
    "CLOSE_COMBAT_WEAPON_REQUIRED": "At least one close combat weapon is required",
    "RANGED_WEAPON_REQUIRED": "Ranged weapon required when Firepower is 2d8 or 2d10",
    "FIREPOWER_REQUIRED_FOR_RANGED_WEAPON": (
        "Firepower level 2d8 or 2d10 required to use ranged weapons"
    ),
    "EQUIPMENT_LIMIT_EXCEEDED": (
        "Equipment limit exceeded: {type} can have {limit} items (has {count})"
    ),
    "TROOPER_POINT_LIMIT_EXCEEDED": "Trooper cost ({cost}) exceeds {limit}-point limit",
    "MULTIPLE_25_POINT_WEIRDOS": "Only one weirdo may cost {min}-{max} points",
    "WARBAND_POINT_LIMIT_EXCEEDED": (
        "Warband total cost ({total_cost}) exceeds point limit ({point_limit})"
    ),
    "LEADER_TRAIT_INVALID": "Leader trait can only be assigned to leaders",
    "COST_APPROACHING_LIMIT": "Cost is within {remaining} point(s) of the {limit}-point limit",
    "WARBAND_APPROACHING_LIMIT": (
        "Warband total cost ({total_cost}) is approaching the point limit ({point_limit})"
    ),
}
