"""Configuration validator: checks a row configuration against hardware limits.

Runs a suite of checks and returns every violation found. Validation never
raises and never modifies the configuration; it mainly guards configurations
loaded from outside, since interactive mutations clamp into range.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable
from rowconf.layout.geometry import compute_geometry
from rowconf.layout.spacing import is_mirror_symmetric, resolve_spacings, row_span
from rowconf.parser.model import RowConfiguration


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Violation:
    check: str
    severity: Severity
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Pass/fail with the first error message as the reason."""

    valid: bool
    reason: str = ""
    violations: list[Violation] = field(default_factory=list)

    @property
    def errors(self) -> list[Violation]:
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Violation]:
        return [v for v in self.violations if v.severity == Severity.WARNING]


def validate_configuration(
    config: RowConfiguration,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> ValidationResult:
    """Run all checks and summarize them.

    An out-of-range row count stops validation early; no spacings are
    derived for it.
    """
    violations = check_row_count(config, constraints)
    if violations:
        return ValidationResult(
            valid=False, reason=violations[0].message, violations=violations
        )
    violations.extend(check_front_wheel_parity(config))
    violations.extend(check_row_distance(config, constraints))
    violations.extend(check_gap_minimum(config, constraints))
    violations.extend(check_symmetry(config))
    violations.extend(check_toolbeam_span(config, constraints))
    violations.extend(check_wheel_spacing(config, constraints))
    violations.extend(check_wheel_proximity(config, constraints))

    errors = [v for v in violations if v.severity == Severity.ERROR]
    return ValidationResult(
        valid=not errors,
        reason=errors[0].message if errors else "",
        violations=violations,
    )


def check_row_count(
    config: RowConfiguration, constraints: ConstraintTable = DEFAULT_CONSTRAINTS
) -> list[Violation]:
    """Active row count must lie in [0, max_active_rows]."""
    if config.active_rows < 0:
        return [
            Violation(
                check="row_count",
                severity=Severity.ERROR,
                message="Active row count cannot be negative",
                context={"active_rows": config.active_rows},
            )
        ]
    if config.active_rows > constraints.max_active_rows:
        return [
            Violation(
                check="row_count",
                severity=Severity.ERROR,
                message=f"Maximum {constraints.max_active_rows} active rows allowed",
                context={"active_rows": config.active_rows},
            )
        ]
    return []


def check_front_wheel_parity(config: RowConfiguration) -> list[Violation]:
    """A single centered front wheel needs an even (or zero) row count."""
    if config.front_wheel.requires_even_rows and config.active_rows % 2 != 0:
        return [
            Violation(
                check="front_wheel_parity",
                severity=Severity.ERROR,
                message=(
                    f"{config.front_wheel.value} configuration requires an even "
                    "number of rows (front wheel must be centered)"
                ),
                context={"active_rows": config.active_rows},
            )
        ]
    return []


def check_row_distance(
    config: RowConfiguration, constraints: ConstraintTable = DEFAULT_CONSTRAINTS
) -> list[Violation]:
    min_distance = constraints.min_distance(config.seed_size)
    if config.row_distance < min_distance:
        return [
            Violation(
                check="row_distance",
                severity=Severity.ERROR,
                message=(
                    f"Minimum row distance for {config.seed_size.value} seeds "
                    f"is {min_distance}mm"
                ),
                context={"row_distance": config.row_distance},
            )
        ]
    return []


def check_gap_minimum(
    config: RowConfiguration, constraints: ConstraintTable = DEFAULT_CONSTRAINTS
) -> list[Violation]:
    """Every individual gap must be at least the seed minimum."""
    min_distance = constraints.min_distance(config.seed_size)
    narrow = [
        i for i, gap in enumerate(resolve_spacings(config)) if gap < min_distance
    ]
    if not narrow:
        return []
    return [
        Violation(
            check="gap_minimum",
            severity=Severity.ERROR,
            message=(
                f"All row spacings must be at least {min_distance}mm for "
                f"{config.seed_size.value} seeds"
            ),
            context={"gaps": narrow},
        )
    ]


def check_symmetry(config: RowConfiguration) -> list[Violation]:
    spacings = resolve_spacings(config)
    if is_mirror_symmetric(spacings):
        return []
    return [
        Violation(
            check="symmetry",
            severity=Severity.ERROR,
            message="Row spacings must be symmetric about the centerline",
            context={"row_spacings": list(spacings)},
        )
    ]


def check_toolbeam_span(
    config: RowConfiguration, constraints: ConstraintTable = DEFAULT_CONSTRAINTS
) -> list[Violation]:
    """Row span plus the minimum pass spacing must fit on the toolbeam."""
    span = row_span(resolve_spacings(config))
    required = span + constraints.min_distance(config.seed_size)
    if config.active_rows > 0 and required > constraints.max_toolbeam_span:
        return [
            Violation(
                check="toolbeam_span",
                severity=Severity.ERROR,
                message=(
                    f"Row span ({span}mm) plus minimum spacing exceeds the "
                    f"maximum toolbeam span of {constraints.max_toolbeam_span}mm"
                ),
                context={"row_span": span, "required": required},
            )
        ]
    return []


def check_wheel_spacing(
    config: RowConfiguration, constraints: ConstraintTable = DEFAULT_CONSTRAINTS
) -> list[Violation]:
    lo, hi = constraints.min_wheel_spacing, constraints.max_wheel_spacing
    if lo <= config.wheel_spacing <= hi:
        return []
    return [
        Violation(
            check="wheel_spacing",
            severity=Severity.ERROR,
            message=f"Wheel spacing must be between {lo}mm and {hi}mm",
            context={"wheel_spacing": config.wheel_spacing},
        )
    ]


def check_wheel_proximity(
    config: RowConfiguration, constraints: ConstraintTable = DEFAULT_CONSTRAINTS
) -> list[Violation]:
    """Advisory: rows on or near a tyre."""
    geometry = compute_geometry(
        resolve_spacings(config),
        config.active_rows,
        config.wheel_spacing,
        config.front_wheel,
        constraints,
    )
    violations: list[Violation] = []
    for i, close in enumerate(geometry.too_close):
        if close:
            violations.append(
                Violation(
                    check="wheel_proximity",
                    severity=Severity.WARNING,
                    message=f"Row {i + 1} is within "
                    f"{constraints.wheel_proximity_margin}mm of a wheel",
                    context={"row": i, "position": geometry.row_positions[i]},
                )
            )
    return violations
