"""Tests for the sample invoice CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tools.einvoice import generate as cli


@pytest.fixture(autouse=True)
def _keep_pytest_logging(monkeypatch):
    # init_logging replaces root handlers, which would detach caplog
    monkeypatch.setattr(cli, "init_logging", lambda: None)


@pytest.mark.parametrize(
    "scenario, version, mode",
    [
        ("reverse_charge", 1, "zugferd"),
        ("domestic_discount", 2, "zugferd"),
        ("multi_line", 3, "xrechnung"),
    ],
)
def test_generate_returns_xml(scenario, version, mode):
    result = cli.generate(scenario=scenario, version=version, mode=mode)

    assert result["scenario"] == scenario
    assert result["version"] == version
    assert result["mode"] == mode
    assert result["xml"].startswith("<?xml")
    assert result["invoice_id"] in result["xml"]
    assert "validation" not in result


def test_main_writes_output_file(tmp_path: Path):
    out = tmp_path / "out" / "invoice.xml"

    code = cli.main(["--scenario", "domestic_discount", "--version", "3", "--mode", "xrechnung", "--out", str(out)])

    assert code == 0
    xml = out.read_text(encoding="utf-8")
    assert "RE-2025-0002" in xml
    assert "urn:xeinkauf.de:kosit:xrechnung_3.0" in xml


def test_main_prints_to_stdout(capsys):
    assert cli.main(["--scenario", "reverse_charge", "--version", "2"]) == 0

    assert "<ram:CategoryCode>AE</ram:CategoryCode>" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["--mode", "peppol"], ["--version", "4"]])
def test_unsupported_configuration_exits_with_error(argv, capsys):
    assert cli.main(argv) == 1
    assert capsys.readouterr().out == ""


def test_unknown_scenario_is_rejected_by_argparse():
    with pytest.raises(SystemExit):
        cli.main(["--scenario", "does-not-exist"])


def test_validate_reports_json(tmp_path: Path, schema_dir: Path, capsys):
    out = tmp_path / "invoice.xml"

    code = cli.main(
        ["--scenario", "multi_line", "--version", "2", "--validate", "--schema-dir", str(schema_dir), "--out", str(out)]
    )

    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report == {
        "messages": ["SCHEMA: OK", "SCHEMATRON: OK"],
        "schema_ok": True,
        "schematron_ok": True,
    }


def test_validate_without_resources_fails(tmp_path: Path, schema_dir: Path):
    # version 1 resources are not part of the fixture
    code = cli.main(
        ["--version", "1", "--validate", "--schema-dir", str(schema_dir), "--out", str(tmp_path / "v1.xml")]
    )

    assert code == 1
