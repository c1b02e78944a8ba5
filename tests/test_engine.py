"""Tests for the layout coordinator and end-to-end editing scenarios."""

import pytest

from rowconf.editing.commands import (
    insert_pair_at_edges,
    insert_pair_at_gap,
    remove_pair,
    set_gap,
    set_row_count,
)
from rowconf.editing.gestures import WheelSide, drag_row, drag_wheel
from rowconf.layout import can_insert_pair, compute_layout, describe_configuration
from rowconf.layout.constants import ConstraintTable
from rowconf.layout.spacing import is_mirror_symmetric, row_span
from rowconf.parser.model import (
    FollowWheels,
    FrontWheelKind,
    ManualWidth,
    RowConfiguration,
    SeedSize,
)


def _uniform(rows, distance, **changes):
    return RowConfiguration(
        active_rows=rows,
        row_distance=distance,
        row_spacings=(distance,) * (rows - 1),
        **changes,
    )


class TestComputeLayout:
    def test_default(self):
        layout = compute_layout(RowConfiguration())
        assert layout.row_positions == [-750.0, -250.0, 250.0, 750.0]
        assert layout.row_span == 1500
        assert layout.passive.total == 4
        assert layout.working_width == 2000
        assert layout.validation.valid

    def test_next_pass_offset_by_working_width(self):
        layout = compute_layout(_uniform(6, 300))
        assert layout.next_pass_positions[0] == -750 + 1800
        assert layout.next_pass_positions[0] - layout.row_positions[-1] == layout.pass_spacing

    def test_stale_spacings_regenerated(self):
        config = RowConfiguration(active_rows=6, row_distance=300, row_spacings=(500, 500, 500))
        assert compute_layout(config).spacings == (300,) * 5

    def test_pricing_inputs(self):
        assert compute_layout(RowConfiguration()).pricing_inputs() == {
            "active_rows": 4,
            "seed_size": "6mm",
            "passive_rows": 4,
        }

    def test_pricing_inputs_without_passive_rows(self):
        config = _uniform(6, 300, seed_size=SeedSize.LARGE)
        assert compute_layout(config).pricing_inputs()["passive_rows"] == 0


class TestCanInsertPair:
    def test_default(self):
        assert can_insert_pair(RowConfiguration())

    def test_at_row_maximum(self):
        assert not can_insert_pair(_uniform(12, 225))

    def test_invalid_layout(self):
        assert not can_insert_pair(_uniform(12, 320))


class TestDescribe:
    def test_default(self):
        assert describe_configuration(RowConfiguration()) == [
            "3-wheel (Open Field)",
            "4 active rows (6mm), 500mm spacing",
            "4 passive rows",
            "Working width: 2.00m",
        ]

    def test_variable_spacing_without_passive_rows(self):
        config = RowConfiguration(
            active_rows=4,
            row_distance=300,
            row_spacings=(300, 400, 300),
            front_wheel=FrontWheelKind.DUAL,
        )
        assert describe_configuration(config) == [
            "4-wheel (Bed Configuration)",
            "4 active rows (6mm), variable spacing",
            "Working width: 1.40m",
        ]


def test_scenario_six_uniform_rows():
    layout = compute_layout(_uniform(6, 300))
    assert layout.spacings == (300, 300, 300, 300, 300)
    assert layout.row_span == 1500
    assert layout.working_width == 1800


def test_scenario_center_gap_split_in_three():
    table = ConstraintTable(min_row_distance={SeedSize.SMALL: 100, SeedSize.LARGE: 100})
    result = insert_pair_at_gap(_uniform(4, 300), 1, table)
    assert result.active_rows == 6
    assert len(result.row_spacings) == 5
    assert sum(result.row_spacings[1:4]) == 300
    assert result.row_spacings[0] == result.row_spacings[-1] == 300


def test_scenario_remove_then_restore_count():
    original = _uniform(6, 300)
    reduced = remove_pair(original, 0)
    assert reduced.active_rows == 4
    restored = set_row_count(reduced, 6)
    assert restored.row_spacings == original.row_spacings


def test_scenario_wheel_drag_clamps_at_minimum():
    result = drag_wheel(RowConfiguration(), WheelSide.RIGHT, -100_000)
    assert result.wheel_spacing == 1500


@pytest.mark.parametrize(
    "config",
    [
        RowConfiguration(),
        _uniform(6, 300),
        _uniform(2, 800, width_mode=FollowWheels()),
        _uniform(8, 400, width_mode=ManualWidth(4800)),
        RowConfiguration(row_spacings=(300, 700, 300), front_wheel=FrontWheelKind.DUAL),
    ],
)
def test_span_plus_pass_spacing_is_working_width(config):
    layout = compute_layout(config)
    assert row_span(layout.spacings) + layout.pass_spacing == layout.working_width


def test_edit_sequence_stays_symmetric():
    config = RowConfiguration()
    steps = [
        lambda c: insert_pair_at_gap(c, 0),
        lambda c: drag_row(c, 1, -37),
        lambda c: set_gap(c, 4, 410),
        lambda c: insert_pair_at_edges(c),
        lambda c: drag_row(c, 7, 123),
        lambda c: remove_pair(c, 2),
        lambda c: insert_pair_at_gap(c, 1),
    ]
    for step in steps:
        config = step(config)
        layout = compute_layout(config)
        assert is_mirror_symmetric(layout.spacings)
        assert layout.validation.valid, layout.validation.reason
