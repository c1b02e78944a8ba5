"""Tests for the configuration validator."""

import pytest

from rowconf.layout.constants import ConstraintTable
from rowconf.layout.validator import Severity, validate_configuration
from rowconf.parser.model import FrontWheelKind, RowConfiguration, SeedSize


def _checks(result):
    return {v.check for v in result.errors}


def test_default_configuration_valid():
    result = validate_configuration(RowConfiguration())
    assert result.valid
    assert result.reason == ""
    assert result.violations == []


def test_too_many_rows():
    config = RowConfiguration(active_rows=14, row_distance=225, row_spacings=(225,) * 13)
    result = validate_configuration(config)
    assert not result.valid
    assert "Maximum 12 active rows allowed" in [v.message for v in result.errors]


def test_negative_row_count_does_not_raise():
    result = validate_configuration(RowConfiguration(active_rows=-1, row_spacings=()))
    assert not result.valid
    assert "row_count" in _checks(result)


def test_huge_row_count_stops_early():
    """Spacings are never regenerated for an out-of-range row count."""
    result = validate_configuration(RowConfiguration(active_rows=10**9, row_spacings=()))
    assert not result.valid
    assert [v.check for v in result.violations] == ["row_count"]
    assert result.reason == "Maximum 12 active rows allowed"


class TestFrontWheelParity:
    def test_odd_rows_with_centered_wheel(self):
        config = RowConfiguration(active_rows=3, row_spacings=(500, 500))
        result = validate_configuration(config)
        assert not result.valid
        assert "front_wheel_parity" in _checks(result)

    def test_odd_rows_with_dual_wheels(self):
        config = RowConfiguration(
            active_rows=3, row_spacings=(500, 500), front_wheel=FrontWheelKind.DUAL
        )
        assert validate_configuration(config).valid


def test_row_distance_below_seed_minimum():
    config = RowConfiguration(seed_size=SeedSize.LARGE, row_distance=240, row_spacings=(500,) * 3)
    result = validate_configuration(config)
    assert _checks(result) == {"row_distance"}
    assert result.reason == "Minimum row distance for 14mm seeds is 250mm"


def test_gap_below_seed_minimum():
    config = RowConfiguration(row_spacings=(500, 200, 500))
    result = validate_configuration(config)
    assert not result.valid
    gap = [v for v in result.errors if v.check == "gap_minimum"][0]
    assert gap.context["gaps"] == [1]


def test_asymmetric_spacings():
    config = RowConfiguration(row_spacings=(500, 400, 300))
    result = validate_configuration(config)
    assert _checks(result) == {"symmetry"}


class TestToolbeam:
    def test_overflow(self):
        config = RowConfiguration(active_rows=12, row_distance=320, row_spacings=(320,) * 11)
        result = validate_configuration(config)
        assert not result.valid
        assert result.reason == (
            "Row span (3520mm) plus minimum spacing exceeds the maximum "
            "toolbeam span of 3500mm"
        )

    @pytest.mark.parametrize("gap,valid", [(3275, True), (3276, False)])
    def test_boundary(self, gap, valid):
        config = RowConfiguration(
            active_rows=2, row_spacings=(gap,), wheel_spacing=1800
        )
        assert validate_configuration(config).valid is valid

    def test_custom_constraint_table(self):
        table = ConstraintTable(max_toolbeam_span=1600)
        result = validate_configuration(RowConfiguration(), table)
        assert "toolbeam_span" in _checks(result)

    def test_no_rows_never_overflows(self):
        config = RowConfiguration(active_rows=0, row_spacings=())
        assert validate_configuration(config).valid


@pytest.mark.parametrize("spacing", [1400, 2400])
def test_wheel_spacing_out_of_range(spacing):
    result = validate_configuration(RowConfiguration(wheel_spacing=spacing))
    assert _checks(result) == {"wheel_spacing"}


def test_wheel_proximity_is_a_warning():
    result = validate_configuration(RowConfiguration(wheel_spacing=1500))
    assert result.valid
    assert result.errors == []
    assert len(result.warnings) == 2
    assert all(w.severity == Severity.WARNING for w in result.warnings)
    assert result.warnings[0].context["row"] == 0


def test_validation_leaves_configuration_untouched():
    config = RowConfiguration(row_spacings=(500, 400, 300))
    validate_configuration(config)
    assert config.row_spacings == (500, 400, 300)
