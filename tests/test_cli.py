import json

from typer.testing import CliRunner

from health_reporter import harmonize
from health_reporter.cli import app

runner = CliRunner()


def test_kinds_lists_identifiers():
    result = runner.invoke(app, ["kinds"])
    assert result.exit_code == 0
    assert "workout: 1 identifier(s)" in result.output
    assert "HKQuantityTypeIdentifierStepCount" in result.output
    assert "HKCorrelationTypeIdentifierBloodPressure" in result.output


def test_units_lists_symbols():
    result = runner.invoke(app, ["units"])
    assert result.exit_code == 0
    assert "energy: J, kJ, cal, kcal" in result.output


def test_diag_shows_settings():
    result = runner.invoke(app, ["diag"])
    assert result.exit_code == 0
    assert "TIMEZONE: UTC" in result.output
    assert "WORKOUT_EVENT_POLICY: drop" in result.output


def test_check_accepts_valid_records(tmp_path, workout, quantity_sample):
    path = tmp_path / "records.json"
    path.write_text(json.dumps([harmonize(workout).to_dict(), harmonize(quantity_sample).to_dict()]))
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 0
    assert "[OK] #0" in result.output
    assert "[OK] #1" in result.output


def test_check_reports_failures(tmp_path, quantity_sample):
    bad = harmonize(quantity_sample).to_dict()
    bad["identifier"] = "HKUnknownType"
    path = tmp_path / "record.json"
    path.write_text(json.dumps(bad))
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "[ERR] #0: InvalidType" in result.output


def test_check_with_explicit_kind(tmp_path, statistics_sample):
    path = tmp_path / "stats.json"
    path.write_text(json.dumps(harmonize(statistics_sample).to_dict()))
    assert runner.invoke(app, ["check", str(path)]).exit_code == 1
    result = runner.invoke(app, ["check", str(path), "--kind", "statistics"])
    assert result.exit_code == 0
    assert "[OK] #0" in result.output


def test_check_rejects_unknown_kind(tmp_path, quantity_sample):
    path = tmp_path / "record.json"
    path.write_text(json.dumps(harmonize(quantity_sample).to_dict()))
    result = runner.invoke(app, ["check", str(path), "--kind", "sleep"])
    assert result.exit_code != 0
