from src.warband_manager.roster_summary import (
    WarbandSummary,
    WeirdoSummary,
    summarize_warband,
)
from src.warband_manager.validation_engine import ValidationEngine
from src.warband_manager.validation_result import (
    FailureCode,
    ValidationFailure,
    ValidationResult,
    ValidationWarning,
    WarningCode,
    render_message,
)
from src.warband_manager.warband_rules import SpecialSlot, find_special_slot

__all__ = [
    "FailureCode",
    "SpecialSlot",
    "ValidationEngine",
    "ValidationFailure",
    "ValidationResult",
    "ValidationWarning",
    "WarbandSummary",
    "WarningCode",
    "WeirdoSummary",
    "find_special_slot",
    "render_message",
    "summarize_warband",
]
