"""Layout coordinator: derives everything the renderer and pricing read.

Each call re-derives the full layout from the configuration; nothing derived
is cached between mutations.
"""

from __future__ import annotations

from dataclasses import dataclass

from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable
from rowconf.layout.geometry import RowGeometry, compute_geometry
from rowconf.layout.passive import PassiveRows, compute_passive_rows
from rowconf.layout.spacing import resolve_spacings
from rowconf.layout.validator import ValidationResult, validate_configuration
from rowconf.layout.working_width import WorkingWidth, resolve_working_width
from rowconf.parser.model import FrontWheelKind, RowConfiguration


@dataclass
class RowLayout:
    """Derived layout for one configuration."""

    config: RowConfiguration
    spacings: tuple[int, ...]
    geometry: RowGeometry
    passive: PassiveRows
    width: WorkingWidth
    validation: ValidationResult

    @property
    def row_positions(self) -> list[float]:
        return self.geometry.row_positions

    @property
    def row_span(self) -> int:
        return self.geometry.row_span

    @property
    def pass_spacing(self) -> float:
        return self.width.pass_spacing

    @property
    def working_width(self) -> float:
        return self.width.working_width

    @property
    def next_pass_positions(self) -> list[float]:
        """Row positions of the adjacent pass, one working width to the right."""
        return [p + self.working_width for p in self.row_positions]

    def pricing_inputs(self) -> dict:
        """Values the pricing calculator consumes."""
        return {
            "active_rows": self.config.active_rows,
            "seed_size": self.config.seed_size.value,
            "passive_rows": self.passive.total,
        }


def compute_layout(
    config: RowConfiguration,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowLayout:
    """Compute the full derived layout of a configuration."""
    spacings = resolve_spacings(config)
    geometry = compute_geometry(
        spacings,
        config.active_rows,
        config.wheel_spacing,
        config.front_wheel,
        constraints,
    )
    passive = compute_passive_rows(
        spacings, geometry.row_positions, config.row_distance, constraints
    )
    return RowLayout(
        config=config,
        spacings=spacings,
        geometry=geometry,
        passive=passive,
        width=resolve_working_width(config, spacings, constraints),
        validation=validate_configuration(config, constraints),
    )


def can_insert_pair(
    config: RowConfiguration,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> bool:
    """Whether the add-row affordance should be offered.

    Requires a valid layout and room for two more rows. Whether a given
    insertion fits on the toolbeam is decided when it is applied.
    """
    if not validate_configuration(config, constraints).valid:
        return False
    return config.active_rows + 2 <= constraints.max_active_rows


def describe_configuration(
    config: RowConfiguration,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> list[str]:
    """Human-readable summary lines."""
    layout = compute_layout(config, constraints)
    field_config = (
        "Open Field"
        if config.front_wheel is FrontWheelKind.SINGLE_CENTERED
        else "Bed Configuration"
    )
    lines = [f"{config.front_wheel.value} ({field_config})"]
    if any(s != config.row_distance for s in layout.spacings):
        lines.append(
            f"{config.active_rows} active rows ({config.seed_size.value}), "
            "variable spacing"
        )
    else:
        lines.append(
            f"{config.active_rows} active rows ({config.seed_size.value}), "
            f"{config.row_distance}mm spacing"
        )
    if layout.passive.total:
        lines.append(f"{layout.passive.total} passive rows")
    lines.append(f"Working width: {layout.working_width / 1000:.2f}m")
    return lines
