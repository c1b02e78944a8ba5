"""Tests for working width and pass-to-pass spacing."""

import pytest

from rowconf.layout.constants import ConstraintTable
from rowconf.layout.working_width import (
    clamp_working_width,
    pattern_pass_spacing,
    resolve_working_width,
    width_mode_for_override,
)
from rowconf.parser.model import FollowWheels, ManualWidth, PatternWidth, RowConfiguration


def _six_rows(**changes):
    config = RowConfiguration(active_rows=6, row_distance=300, row_spacings=(300,) * 5)
    return config.evolve(**changes)


class TestPatternPassSpacing:
    def test_uniform_repeats_gap(self):
        assert pattern_pass_spacing((300,) * 5, 300) == 300

    def test_alternating_continues_alternation(self):
        assert pattern_pass_spacing((300, 500, 300, 500, 300), 400) == 500

    def test_irregular_falls_back_to_row_distance(self):
        assert pattern_pass_spacing((500, 300, 300, 500), 400) == 400

    def test_no_gaps(self):
        assert pattern_pass_spacing((), 450) == 450


class TestResolve:
    def test_pattern_mode(self):
        width = resolve_working_width(_six_rows())
        assert width.working_width == 1800
        assert width.pass_spacing == 300

    def test_follow_wheels(self):
        width = resolve_working_width(_six_rows(width_mode=FollowWheels(), wheel_spacing=2300))
        assert width.working_width == 2300
        assert width.pass_spacing == 800

    def test_follow_wheels_keeps_minimum_pass_spacing(self):
        config = RowConfiguration(wheel_spacing=1500, width_mode=FollowWheels())
        width = resolve_working_width(config)
        assert width.pass_spacing == 225
        assert width.working_width == 1725

    def test_manual(self):
        width = resolve_working_width(_six_rows(width_mode=ManualWidth(2400)))
        assert width.working_width == 2400
        assert width.pass_spacing == 900

    def test_manual_clamped_to_ceiling(self):
        width = resolve_working_width(_six_rows(width_mode=ManualWidth(9000)))
        assert width.working_width == 5000

    def test_no_rows(self):
        width = resolve_working_width(RowConfiguration(active_rows=0, row_spacings=()))
        assert width.working_width == 0
        assert width.pass_spacing == 0

    @pytest.mark.parametrize(
        "mode",
        [PatternWidth(), FollowWheels(), ManualWidth(2000), ManualWidth(100)],
    )
    def test_span_plus_pass_spacing_is_working_width(self, mode):
        config = RowConfiguration(row_spacings=(600, 500, 600), width_mode=mode)
        width = resolve_working_width(config)
        assert 1700 + width.pass_spacing == width.working_width


class TestClamp:
    def test_minimum_pass_spacing(self):
        assert clamp_working_width(1000, 1500, 225) == 1725

    def test_ceiling_wins_over_pass_spacing(self):
        table = ConstraintTable(max_working_width=1600)
        assert clamp_working_width(1800, 1500, 225, table) == 1600

    def test_span_is_final_floor(self):
        table = ConstraintTable(max_working_width=1400)
        assert clamp_working_width(4000, 1500, 225, table) == 1500


class TestOverride:
    def test_pattern_value_clears_override(self):
        assert width_mode_for_override(_six_rows(), 1800) == PatternWidth()

    def test_override_clamped(self):
        assert width_mode_for_override(_six_rows(), 100) == ManualWidth(1725)

    def test_override_rounded_to_row_grid(self):
        assert width_mode_for_override(_six_rows(), 2456) == ManualWidth(2460)


def test_mode_switch_round_trip():
    """Wheel-following to pattern and back returns the same working width."""
    follow = _six_rows(width_mode=FollowWheels(), wheel_spacing=2300)
    before = resolve_working_width(follow).working_width
    pattern = follow.evolve(width_mode=PatternWidth())
    assert resolve_working_width(pattern).working_width == 1800
    after = resolve_working_width(pattern.evolve(width_mode=FollowWheels())).working_width
    assert after == before == 2300
