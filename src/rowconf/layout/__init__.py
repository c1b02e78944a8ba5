"""Row-configuration geometry: spacing, positions, passive rows, widths, wheels."""

from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable
from rowconf.layout.engine import (
    RowLayout,
    can_insert_pair,
    compute_layout,
    describe_configuration,
)
from rowconf.layout.validator import ValidationResult, validate_configuration
from rowconf.layout.wheels import WheelSuggestion, optimize_wheel_spacing

__all__ = [
    "DEFAULT_CONSTRAINTS",
    "ConstraintTable",
    "RowLayout",
    "ValidationResult",
    "WheelSuggestion",
    "can_insert_pair",
    "compute_layout",
    "describe_configuration",
    "optimize_wheel_spacing",
    "validate_configuration",
]
