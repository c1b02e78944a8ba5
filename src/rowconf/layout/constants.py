"""Hardware limits and engine constants.

All lengths are integer millimetres unless noted otherwise. The module-level
values are the defaults of ``ConstraintTable``; engine functions take a table
argument so alternative hardware can be checked without patching globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rowconf.parser.model import SeedSize

# ---------------------------------------------------------------------------
# Row limits
# ---------------------------------------------------------------------------
MIN_ROW_DISTANCE: dict[SeedSize, int] = {
    SeedSize.SMALL: 225,
    SeedSize.LARGE: 250,
}
"""Minimum distance between two adjacent active rows, per seed size."""

MAX_ACTIVE_ROWS: int = 12
"""Maximum number of powered seeding rows."""

MAX_TOOLBEAM_SPAN: int = 3500
"""Physical toolbeam length.

Row span plus one minimum row distance must fit on it.
"""

MAX_EDIT_SPACING: int = 800
"""Largest single gap or row distance accepted from a typed value."""

# ---------------------------------------------------------------------------
# Passive rows
# ---------------------------------------------------------------------------
PASSIVE_UNIT: int = 225
"""Sub-spacing of passive rows. Independent of seed size."""

PASSIVE_THRESHOLD: int = 2 * PASSIVE_UNIT
"""Smallest gap that carries a passive row."""

# ---------------------------------------------------------------------------
# Wheels
# ---------------------------------------------------------------------------
MIN_WHEEL_SPACING: int = 1500
"""Minimum distance between rear wheel centers."""

MAX_WHEEL_SPACING: int = 2300
"""Maximum distance between rear wheel centers."""

WHEEL_SPACING_STEP: int = 100
"""Grid for wheel dragging and the wheel-spacing search."""

WHEEL_WIDTH: int = 170
"""Tyre width."""

WHEEL_PROXIMITY_MARGIN: int = 50
"""Rows closer than this to a tyre edge are flagged."""

# ---------------------------------------------------------------------------
# Working width
# ---------------------------------------------------------------------------
MAX_WORKING_WIDTH: int = 5000
"""Hard ceiling on the working width (500 cm)."""

# ---------------------------------------------------------------------------
# Interaction granularity
# ---------------------------------------------------------------------------
ROW_STEP: int = 10
"""Rounding grid for dragged and typed row gaps."""

MIN_PLANT_SPACING: int = 10
"""Minimum in-row plant spacing (cm)."""

MAX_PLANT_SPACING: int = 40
"""Maximum in-row plant spacing (cm)."""

# ---------------------------------------------------------------------------
# Wheel alignment grades
# ---------------------------------------------------------------------------
ALIGNMENT_EXCELLENT: int = 20
ALIGNMENT_GOOD: int = 50
ALIGNMENT_ACCEPTABLE: int = 100


@dataclass(frozen=True)
class ConstraintTable:
    """Static hardware limits checked by the engine."""

    min_row_distance: dict[SeedSize, int] = field(
        default_factory=lambda: dict(MIN_ROW_DISTANCE)
    )
    max_active_rows: int = MAX_ACTIVE_ROWS
    max_toolbeam_span: int = MAX_TOOLBEAM_SPAN
    max_edit_spacing: int = MAX_EDIT_SPACING
    passive_unit: int = PASSIVE_UNIT
    min_wheel_spacing: int = MIN_WHEEL_SPACING
    max_wheel_spacing: int = MAX_WHEEL_SPACING
    wheel_spacing_step: int = WHEEL_SPACING_STEP
    wheel_width: int = WHEEL_WIDTH
    wheel_proximity_margin: int = WHEEL_PROXIMITY_MARGIN
    max_working_width: int = MAX_WORKING_WIDTH
    row_step: int = ROW_STEP

    def min_distance(self, seed_size: SeedSize) -> int:
        return self.min_row_distance[seed_size]

    @property
    def passive_threshold(self) -> int:
        return 2 * self.passive_unit

    @property
    def wheel_clearance(self) -> float:
        """Distance from a wheel center within which a row is too close."""
        return self.wheel_width / 2 + self.wheel_proximity_margin


DEFAULT_CONSTRAINTS = ConstraintTable()
