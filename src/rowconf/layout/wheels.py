"""Wheel-spacing optimizer.

The forbidden wheel positions form a union of intervals around the rows, so
instead of solving for a spacing the optimizer scores every spacing on a
fixed grid between the minimum and maximum wheel spacing and keeps the
closest one that puts no tyre on or near a row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rowconf.layout.constants import (
    ALIGNMENT_ACCEPTABLE,
    ALIGNMENT_EXCELLENT,
    ALIGNMENT_GOOD,
    DEFAULT_CONSTRAINTS,
    ConstraintTable,
)

logger = logging.getLogger(__name__)


@dataclass
class WheelSpacingOption:
    """One candidate spacing on the search grid."""

    spacing: int
    conflicts: int
    score: int
    is_optimal: bool = False


@dataclass
class WheelSuggestion:
    """Result of the wheel-spacing search."""

    spacing: int
    is_optimal: bool
    conflicts: int
    score: int
    recommendation: str
    options: list[WheelSpacingOption] = field(default_factory=list)


def wheel_conflicts(
    spacing: float,
    row_positions: list[float],
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> int:
    """Number of rows on or too close to either rear wheel."""
    clearance = constraints.wheel_clearance
    half = spacing / 2
    return sum(
        1
        for pos in row_positions
        if abs(pos - half) <= clearance or abs(pos + half) <= clearance
    )


def gap_midpoints(row_positions: list[float], row_distance: int) -> list[float]:
    """Midpoints between rows, plus a virtual half gap beyond each outer row."""
    if not row_positions:
        return []
    mids = [
        (row_positions[i] + row_positions[i + 1]) / 2
        for i in range(len(row_positions) - 1)
    ]
    return [row_positions[0] - row_distance / 2, *mids, row_positions[-1] + row_distance / 2]


def alignment_score(spacing: float, midpoints: list[float]) -> int:
    """Distance of both wheel centers from their nearest gap midpoint."""
    if not midpoints:
        return 0
    half = spacing / 2
    left = min(abs(-half - m) for m in midpoints)
    right = min(abs(half - m) for m in midpoints)
    return int(round(left + right))


def recommendation_for(score: int) -> str:
    if score < ALIGNMENT_EXCELLENT:
        return "Excellent - wheels centered between rows"
    if score < ALIGNMENT_GOOD:
        return "Good - wheels well positioned between rows"
    if score < ALIGNMENT_ACCEPTABLE:
        return "Acceptable - minor offset from row centers"
    return "Consider adjusting row spacing for better wheel alignment"


def wheel_spacing_grid(constraints: ConstraintTable = DEFAULT_CONSTRAINTS) -> list[int]:
    return list(
        range(
            constraints.min_wheel_spacing,
            constraints.max_wheel_spacing + 1,
            constraints.wheel_spacing_step,
        )
    )


def wheel_spacing_options(
    row_positions: list[float],
    row_distance: int,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> list[WheelSpacingOption]:
    """Score every grid spacing; the best-aligned clear one is marked optimal.

    Ties prefer the wider spacing.
    """
    midpoints = gap_midpoints(row_positions, row_distance)
    options = [
        WheelSpacingOption(
            spacing=s,
            conflicts=wheel_conflicts(s, row_positions, constraints),
            score=alignment_score(s, midpoints),
        )
        for s in wheel_spacing_grid(constraints)
    ]
    if options:
        best = min(options, key=lambda o: (o.conflicts, o.score, -o.spacing))
        best.is_optimal = True
    return options


def optimize_wheel_spacing(
    row_positions: list[float],
    current_spacing: int,
    row_distance: int,
    constraints: ConstraintTable = DEFAULT_CONSTRAINTS,
) -> WheelSuggestion:
    """Suggest the clear wheel spacing closest to ``current_spacing``.

    The current spacing is itself a candidate when it lies in range, so a
    clear off-grid spacing is reported as already optimal. When no spacing
    is clear, the one with the fewest conflicting rows wins.
    """
    lo, hi = constraints.min_wheel_spacing, constraints.max_wheel_spacing
    candidates = wheel_spacing_grid(constraints)
    if lo <= current_spacing <= hi and current_spacing not in candidates:
        candidates.append(current_spacing)

    def rank(spacing: int) -> tuple[int, int, int]:
        return (
            wheel_conflicts(spacing, row_positions, constraints),
            abs(spacing - current_spacing),
            -spacing,
        )

    best = min(candidates, key=rank)
    conflicts = wheel_conflicts(best, row_positions, constraints)
    score = alignment_score(best, gap_midpoints(row_positions, row_distance))
    if conflicts:
        logger.debug(
            "No clear wheel spacing for %d rows; best %d has %d conflicts",
            len(row_positions), best, conflicts,
        )
    return WheelSuggestion(
        spacing=best,
        is_optimal=best == current_spacing,
        conflicts=conflicts,
        score=score,
        recommendation=recommendation_for(score),
        options=wheel_spacing_options(row_positions, row_distance, constraints),
    )
