import csv

import pytest

import feedrag
from feedrag import main, main_cli


def test_cli_prints_table_and_break_even(capsys):
    main_cli(["--start-year", "2024", "--engine", "python"])
    out = capsys.readouterr().out
    assert "Fee scenarios: lower 2.00% | base 3.00% | higher 4.00%" in out
    assert "2053" in out
    assert "$311,865" in out
    assert "In 24.4 years" in out


def test_cli_italian_and_csv(tmp_path, capsys):
    path = tmp_path / "out.csv"
    main_cli(["--locale", "it-IT", "--years", "5", "--start-year", "2030", "--csv", str(path)])
    out = capsys.readouterr().out
    assert "In 24,4 anni" in out
    with open(path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == "Year"
    assert rows[1][:4] == ["2030", "100000", "100000", "100000"]
    assert len(rows) == 6


def test_cli_reports_undefined_break_even(capsys):
    main_cli(["--fee", "0", "--years", "3"])
    assert "undefined" in capsys.readouterr().out


def test_cli_rejects_bad_config(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main_cli(["--capital", "0"])
    assert excinfo.value.code == 2
    assert "Starting capital must be positive" in capsys.readouterr().err


def test_main_requires_cli_flag_for_cli_options(monkeypatch):
    monkeypatch.setattr(feedrag, "run_gui", lambda locale=None: pytest.fail("GUI started"))
    with pytest.raises(SystemExit):
        main(["--years", "10"])


def test_main_defaults_to_gui(monkeypatch):
    started = []
    monkeypatch.setattr(feedrag, "run_gui", lambda locale=None: started.append(locale))
    main(["--locale", "it-IT"])
    assert started == ["it-IT"]


def test_cli_reads_italian_numbers(capsys):
    main_cli(["--locale", "it-IT", "--fee", "2,5", "--years", "3", "--start-year", "2024"])
    assert "base 2,50%" in capsys.readouterr().out


def test_cli_rejects_horizon_that_overflows(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main_cli(["--years", "12000", "--start-year", "2024"])
    assert excinfo.value.code == 2
    assert "representable" in capsys.readouterr().err
