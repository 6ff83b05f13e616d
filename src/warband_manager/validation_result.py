"""Structured validation outcomes.

Failures carry a stable code, the path of the offending field, the id of
the offending entity and the values needed to render a message. Message
text is produced on demand from VALIDATION_MESSAGES so callers can swap in
their own templates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from src.warband_manager.config import VALIDATION_MESSAGES


class FailureCode(str, Enum):
    WARBAND_NAME_REQUIRED = "WARBAND_NAME_REQUIRED"
    INVALID_POINT_LIMIT = "INVALID_POINT_LIMIT"
    WEIRDO_NAME_REQUIRED = "WEIRDO_NAME_REQUIRED"
    ATTRIBUTES_INCOMPLETE = "ATTRIBUTES_INCOMPLETE"
    CLOSE_COMBAT_WEAPON_REQUIRED = "CLOSE_COMBAT_WEAPON_REQUIRED"
    RANGED_WEAPON_REQUIRED = "RANGED_WEAPON_REQUIRED"
    FIREPOWER_REQUIRED_FOR_RANGED_WEAPON = "FIREPOWER_REQUIRED_FOR_RANGED_WEAPON"
    EQUIPMENT_LIMIT_EXCEEDED = "EQUIPMENT_LIMIT_EXCEEDED"
    LEADER_TRAIT_INVALID = "LEADER_TRAIT_INVALID"
    MULTIPLE_25_POINT_WEIRDOS = "MULTIPLE_25_POINT_WEIRDOS"
    TROOPER_POINT_LIMIT_EXCEEDED = "TROOPER_POINT_LIMIT_EXCEEDED"
    WARBAND_POINT_LIMIT_EXCEEDED = "WARBAND_POINT_LIMIT_EXCEEDED"


class WarningCode(str, Enum):
    COST_APPROACHING_LIMIT = "COST_APPROACHING_LIMIT"
    WARBAND_APPROACHING_LIMIT = "WARBAND_APPROACHING_LIMIT"


def render_message(
    code: str,
    params: Optional[Mapping[str, Any]] = None,
    templates: Optional[Mapping[str, str]] = None,
) -> str:
    """Render the message for *code*, interpolating *params*.

    Example:
        render_message("EQUIPMENT_LIMIT_EXCEEDED",
                       {"type": "leader", "limit": 3, "count": 4})
        # "Equipment limit exceeded: leader can have 3 items (has 4)"
    """
    key = code.value if isinstance(code, Enum) else str(code)
    template = (templates or VALIDATION_MESSAGES)[key]
    values = {
        k: ", ".join(str(v) for v in value) if isinstance(value, (list, tuple)) else value
        for k, value in (params or {}).items()
    }
    return template.format(**values)


@dataclass(frozen=True)
class ValidationFailure:
    """A single broken rule."""

    code: FailureCode
    field: str
    entity_id: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return render_message(self.code, self.params)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "field": self.field,
            "entity_id": self.entity_id,
            "params": dict(self.params),
            "message": self.message,
        }


@dataclass(frozen=True)
class ValidationWarning:
    """Advisory note; never affects validity."""

    code: WarningCode
    field: str
    entity_id: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return render_message(self.code, self.params)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "field": self.field,
            "entity_id": self.entity_id,
            "params": dict(self.params),
            "message": self.message,
        }


@dataclass
class ValidationResult:
    """All failures (and warnings) found in one validation pass."""

    failures: List[ValidationFailure] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.failures) == 0

    @property
    def codes(self) -> List[FailureCode]:
        return [f.code for f in self.failures]

    def failures_for(self, entity_id: str) -> List[ValidationFailure]:
        return [f for f in self.failures if f.entity_id == entity_id]

    def messages(self) -> List[str]:
        return [f.message for f in self.failures]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.is_valid,
            "failures": [f.to_dict() for f in self.failures],
            "warnings": [w.to_dict() for w in self.warnings],
        }
