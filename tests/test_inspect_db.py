# tests/test_inspect_db.py

import argparse
from datetime import date, datetime

import pytest

import inspect_db


def test_iso_day():
    assert inspect_db.iso_day("2025-11-21") == date(2025, 11, 21)
    assert inspect_db.iso_day("2025-11-21T00:00:00+07:00") == date(2025, 11, 21)
    for bad in ("11/21", "2025-02-30", "Thursday"):
        with pytest.raises(argparse.ArgumentTypeError):
            inspect_db.iso_day(bad)


def test_main_prints_open_tasks(gateway, settings, capsys):
    gateway.add_task("demo", "Report", "Fisika", datetime(2025, 11, 21, 15, 0), "high")
    gateway.add_task("demo", "Essay", "Sejarah", datetime(2025, 11, 22, 10, 0), "low")
    gateway.update_status("demo", "essay", "done")

    assert inspect_db.main(["--from", "2025-11-21", "--to", "2025-11-21"], gateway=gateway, settings=settings) == 0
    out = capsys.readouterr().out
    assert "[ ] 2025-11-21 15:00  Report  Fisika (high, todo)" in out
    assert "Essay" not in out
    assert "-- 1 task(s)" in out

    inspect_db.main(["--all"], gateway=gateway, settings=settings)
    out = capsys.readouterr().out
    assert "[x] 2025-11-22 10:00  Essay   Sejarah (low, done)" in out
    assert "-- 2 task(s)" in out


def test_main_empty(gateway, settings, capsys):
    inspect_db.main(["--from", "2030-01-01"], gateway=gateway, settings=settings)
    assert capsys.readouterr().out.strip() == "No open tasks."
