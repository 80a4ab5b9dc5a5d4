# tests/test_cli.py

import csv
import json

import pytest

from PhysicalUnitsTool import cli
from PhysicalUnitsTool import units as U
from PhysicalUnitsTool.units import Unit


def _json_out(capsys):
    return json.loads(capsys.readouterr().out)


def test_convert_single_value(capsys):
    assert cli.main(["convert", "--value", "1 V", "--to", "mV"]) == 0
    out = _json_out(capsys)
    assert out["value"] == 1000.0
    assert out["unit"] == "mV"


def test_convert_input_file(tmp_path, capsys):
    src = tmp_path / "readings.txt"
    src.write_text("# periods\n2 s\n1 ms\n", encoding="utf-8")
    assert cli.main(["convert", "--input", str(src), "--to", "Hz"]) == 0
    out = _json_out(capsys)
    assert [r["value"] for r in out] == pytest.approx([0.5, 1000.0])


def test_convert_csv_output(tmp_path):
    src = tmp_path / "readings.txt"
    src.write_text("1 V\n2 V\n", encoding="utf-8")
    dst = tmp_path / "out.csv"
    assert cli.main(["convert", "--input", str(src), "--to", "mV", "--output", str(dst)]) == 0
    with open(dst, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert float(rows[1]["value"]) == 2000.0


def test_unsupported_output_extension(tmp_path):
    with pytest.raises(SystemExit):
        cli.main(["convert", "--value", "1 V", "--to", "mV", "--output", str(tmp_path / "out.txt")])


def test_convert_incompatible_units_exits_with_message():
    with pytest.raises(SystemExit) as exc:
        cli.main(["convert", "--value", "1 V", "--to", "H"])
    assert str(exc.value).startswith("error:")


def test_convert_requires_value_or_input():
    with pytest.raises(SystemExit):
        cli.main(["convert", "--to", "mV"])


def test_autorange(capsys):
    argv = ["autorange", "--value", "0.0045 mV", "--policy", "PREFER_1_10", "--candidates", "uV", "mV", "V", "--scores"]
    assert cli.main(argv) == 0
    raw = capsys.readouterr().out
    assert "μV" in raw
    out = json.loads(raw)
    assert out["unit"] == "μV"
    assert out["value"] == pytest.approx(4.5)
    assert [s["unit"] for s in out["scores"]] == ["mV", "μV", "V"]


def test_autorange_strictness_flags(capsys):
    base = ["autorange", "--value", "1000 ms", "--policy", "PREFER_1_10", "--candidates", "Hz", "s"]
    cli.main(base)
    assert _json_out(capsys)["unit"] == "s"
    cli.main(base + ["--no-strict"])
    assert _json_out(capsys)["unit"] == "Hz"


def test_units_listing(capsys):
    assert cli.main(["units", "--property", "VOLTAGE"]) == 0
    out = _json_out(capsys)
    assert list(out) == ["VOLTAGE"]
    assert cli.main(["units", "--properties"]) == 0
    assert _json_out(capsys)["FREQUENCY"]["converts_to"] == ["TIME"]


def test_check_ok(capsys):
    assert cli.main(["check"]) == 0
    out = _json_out(capsys)
    assert out["status"] == "ok"
    assert out["units"] == len(Unit)


def test_check_reports_inconsistency(monkeypatch, capsys):
    monkeypatch.delitem(U.UNIT_PROPS, Unit.kV)
    assert cli.main(["check"]) == 2
    assert "Catalog inconsistency" in capsys.readouterr().err


def test_check_detects_anchor_drift(monkeypatch):
    monkeypatch.setattr(cli.F, "DBM_REF_W", 1.0)
    with pytest.raises(SystemExit, match="Anchor drift"):
        cli.main(["check"])
