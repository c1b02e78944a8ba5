"""Lateral geometry of rows and wheels.

Positions are lateral offsets in mm from the robot centerline; negative is
left. Rows are centered on zero by construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rowconf.layout.constants import DEFAULT_CONSTRAINTS, ConstraintTable
from rowconf.layout.spacing import row_span
from rowconf.parser.model import FrontWheelKind


@dataclass
class WheelPositions:
    """Wheel center positions."""

    left: float
    right: float
    # Single centered front wheel; None for dual front wheels
    front: float | None = None

    def centers(self) -> list[float]:
        """All distinct wheel centers that can run over a row."""
        result = [self.left, self.right]
        if self.front is not None:
            result.append(self.front)
        return result

    def edges(self, wheel_width: float) -> list[tuple[float, float]]:
        """(outer-left, outer-right) tyre edges for every wheel."""
        half = wheel_width / 2
        return [(c - half, c + half) for c in self.centers()]


@dataclass
class RowGeometry:
    """Row and wheel positions for one configuration."""

    row_positions: list[float] = field(default_factory=list)
    row_span: int = 0
    wheels: WheelPositions = field(default_factory=lambda: WheelPositions(0.0, 0.0))
    too_close: list[bool] = field(default_factory=list)

    @property
    def has_proximity_warning(self) -> bool:
        return any(self.too_close)


def compute_row_positions(spacings: tuple[int, ...] | list[int], active_rows: int) -> list[float]:
    """Absolute row positions, first row at ``-row_span / 2``."""
    if active_rows <= 0:
        return []
    pos = -row_span(spacings) / 2
    positions = [pos]
    for gap in spacings[: active_rows - 1]:
        pos += gap
        positions.append(pos)
    return positions


def compute_wheel_positions(wheel_spacing: int, front_wheel: FrontWheelKind) -> WheelPositions:
    """Rear wheels at +/- half the spacing; a single front wheel sits at zero."""
    half = wheel_spacing / 2
    front = 0.0 if front_wheel is FrontWheelKind.SINGLE_CENTERED else None
    return WheelPositions(left=-half, right=half, front=front)


def is_row_too_close(
    row_position: float,
    wheels: WheelPositions,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> bool:
    """True if the row is on a tyre or within the proximity margin of one."""
    margin = constraints.wheel_proximity_margin
    for left_edge, right_edge in wheels.edges(constraints.wheel_width):
        if left_edge - margin <= row_position <= right_edge + margin:
            return True
    return False


def compute_geometry(
    spacings: tuple[int, ...] | list[int],
    active_rows: int,
    wheel_spacing: int,
    front_wheel: FrontWheelKind,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> RowGeometry:
    """Derive row positions, wheel positions and proximity flags."""
    positions = compute_row_positions(spacings, active_rows)
    wheels = compute_wheel_positions(wheel_spacing, front_wheel)
    return RowGeometry(
        row_positions=positions,
        row_span=row_span(spacings),
        wheels=wheels,
        too_close=[is_row_too_close(p, wheels, constraints) for p in positions],
    )
