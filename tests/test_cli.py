"""Tests for the CLI entry points."""

import json
from pathlib import Path

from click.testing import CliRunner

from rowconf.cli import cli

FIXTURES = Path(__file__).parent / "fixtures"
SIX_ROWS = FIXTURES / "six_rows_300.json"
TOO_WIDE = FIXTURES / "too_wide.json"
SAVED_STATE = FIXTURES / "saved_state.json"


def test_info_output():
    """info command prints the derived layout."""
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(SIX_ROWS)])
    assert result.exit_code == 0, result.output
    assert "Active rows: 6" in result.output
    assert "Row span: 150 cm" in result.output
    assert "Working width: 180 cm" in result.output
    assert "Wheels: -90 cm / 90 cm, front 0 cm" in result.output
    assert "row 1: -75 cm" in result.output
    assert "Summary: 3-wheel (Open Field)" in result.output


def test_info_marks_rows_near_wheels(tmp_path):
    path = tmp_path / "close.json"
    path.write_text(json.dumps({"wheel_spacing": 1500}))
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(path)])
    assert result.exit_code == 0, result.output
    assert result.output.count("(near wheel)") == 2


def test_info_saved_state():
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(SAVED_STATE)])
    assert result.exit_code == 0, result.output
    assert "Width mode: follow-wheels" in result.output
    assert "Working width: 200 cm" in result.output
    assert "front" not in result.output.split("Wheels:")[1].splitlines()[0]


def test_validate_success():
    """validate command succeeds on valid input."""
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(SIX_ROWS)])
    assert result.exit_code == 0
    assert "Valid: 6 active rows, 0 passive rows, working width 180 cm" in result.output


def test_validate_toolbeam_overflow():
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(TOO_WIDE)])
    assert result.exit_code == 1
    assert "Validation errors:" in result.output
    assert "exceeds the maximum toolbeam span of 3500mm" in result.output


def test_validate_bad_file(tmp_path):
    """validate command reports parse errors."""
    bad = tmp_path / "bad.json"
    bad.write_text("not json at all")
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(bad)])
    assert result.exit_code == 1
    assert "Parse error: Invalid JSON" in result.output


def test_validate_reports_warnings(tmp_path):
    path = tmp_path / "close.json"
    path.write_text(json.dumps({"wheel_spacing": 1500}))
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(path)])
    assert result.exit_code == 0
    assert "Warning: Row 1 is within 50mm of a wheel" in result.output


def test_optimize_current_is_optimal():
    runner = CliRunner()
    result = runner.invoke(cli, ["optimize", str(SIX_ROWS)])
    assert result.exit_code == 0, result.output
    assert "Current wheel spacing 180 cm is optimal" in result.output
    assert "180 cm: 0 conflicts, score 0 (suggested, best aligned)" in result.output
    assert result.output.count("(suggested") == 1


def test_optimize_suggests(tmp_path):
    path = tmp_path / "close.json"
    path.write_text(json.dumps({"wheel_spacing": 1500}))
    runner = CliRunner()
    result = runner.invoke(cli, ["optimize", str(path)])
    assert result.exit_code == 0, result.output
    assert "Suggested wheel spacing:" in result.output
    assert "(current 150 cm)" in result.output
    # Closest clear spacing and best-aligned spacing are labelled separately
    assert "180 cm: 0 conflicts, score 200 (suggested)" in result.output
    assert "200 cm: 0 conflicts, score 0 (best aligned)" in result.output


def test_presets_listed():
    runner = CliRunner()
    result = runner.invoke(cli, ["presets"])
    assert result.exit_code == 0
    assert "onion: Onion, 8 rows (14mm) at 30 cm" in result.output


def test_new_default_output():
    """new command writes rowconfig.json when no -o given."""
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["new"])
        assert result.exit_code == 0, result.output
        data = json.loads(Path("rowconfig.json").read_text())
    assert data["active_rows"] == 4
    assert "Wrote 4 rows -> rowconfig.json" in result.output


def test_new_from_preset(tmp_path):
    out = tmp_path / "carrot.json"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["new", "--preset", "carrot", "--front-wheel", "4-wheel", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["active_rows"] == 10
    assert data["row_spacings"] == [250] * 9
    assert data["front_wheel"] == "4-wheel"


def test_new_output_validates(tmp_path):
    out = tmp_path / "beet.json"
    runner = CliRunner()
    runner.invoke(cli, ["new", "--preset", "sugar-beet", "-o", str(out)])
    result = runner.invoke(cli, ["-v", "validate", str(out)])
    assert result.exit_code == 0, result.output
    assert "Valid: 6 active rows" in result.output


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_huge_row_count_reported(tmp_path):
    path = tmp_path / "huge.json"
    path.write_text(json.dumps({"active_rows": 10**9}))
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(path)])
    assert result.exit_code == 1
    assert "Cannot lay out: Maximum 12 active rows allowed" in result.output
    result = runner.invoke(cli, ["validate", str(path)])
    assert result.exit_code == 1
    assert "Maximum 12 active rows allowed" in result.output


def test_non_finite_value_is_parse_error(tmp_path):
    path = tmp_path / "inf.json"
    path.write_text('{"wheel_spacing": Infinity}')
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(path)])
    assert result.exit_code == 1
    assert "Parse error: 'wheel_spacing' must be a finite number" in result.output
