"""Data model for row configurations."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class SeedSize(Enum):
    """Seed-handling class of the seeding units."""

    SMALL = "6mm"
    LARGE = "14mm"


class FrontWheelKind(Enum):
    """Front axle arrangement.

    A single centered front wheel runs on the lateral centerline, so rows
    must pair up around it. Dual front wheels track the rear wheels.
    """

    SINGLE_CENTERED = "3-wheel"
    DUAL = "4-wheel"

    @property
    def requires_even_rows(self) -> bool:
        return self is FrontWheelKind.SINGLE_CENTERED

    @property
    def min_removable_rows(self) -> int:
        """Fewest rows from which a row pair can still be removed."""
        return 2 if self.requires_even_rows else 1


class WidthMode:
    """How the pass-to-pass spacing is derived.

    Exactly one of PatternWidth, FollowWheels or ManualWidth.
    """

    label: str = ""


@dataclass(frozen=True)
class PatternWidth(WidthMode):
    """Continue the row spacing pattern into the next pass."""

    label: str = field(default="pattern", init=False)


@dataclass(frozen=True)
class FollowWheels(WidthMode):
    """Working width equals the rear wheel spacing."""

    label: str = field(default="follow-wheels", init=False)


@dataclass(frozen=True)
class ManualWidth(WidthMode):
    """User-specified working width in mm."""

    value: int = 0
    label: str = field(default="manual", init=False)


@dataclass(frozen=True)
class RowConfiguration:
    """Authoritative row-configuration state.

    All lengths are integer millimetres. Every mutation produces a new
    instance; derived geometry is never stored here.
    """

    seed_size: SeedSize = SeedSize.SMALL
    active_rows: int = 4
    row_distance: int = 500
    row_spacings: tuple[int, ...] = (500, 500, 500)
    wheel_spacing: int = 1800
    front_wheel: FrontWheelKind = FrontWheelKind.SINGLE_CENTERED
    width_mode: WidthMode = field(default_factory=PatternWidth)
    # Plant spacing along the row, in cm
    plant_spacing: int = 18

    def __post_init__(self) -> None:
        if not isinstance(self.row_spacings, tuple):
            object.__setattr__(self, "row_spacings", tuple(self.row_spacings))

    @property
    def gap_count(self) -> int:
        return max(self.active_rows - 1, 0)

    @property
    def has_stale_spacings(self) -> bool:
        """True when row_spacings no longer matches the row count."""
        return len(self.row_spacings) != self.gap_count

    def evolve(self, **changes) -> RowConfiguration:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

