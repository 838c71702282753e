# tests/test_normalize.py

from datetime import date, datetime

import pytest

from normalize import (
    as_string,
    compose_due_timestamp,
    day_bounds,
    extract_date_only,
    extract_time_only,
    map_priority,
    map_status,
    normalize_intent_name,
    parse_day,
    parse_due_timestamp,
)


def test_normalize_intent_name():
    assert normalize_intent_name("  Add_Task ") == "add_task"
    assert normalize_intent_name("Tambah Tugas") == "tambah tugas"
    assert normalize_intent_name(None) == ""
    assert normalize_intent_name("") == ""


def test_as_string_fallback_only_for_none():
    assert as_string(None, "Umum") == "Umum"
    assert as_string("", "Umum") == ""
    assert as_string(42) == "42"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-11-21", "2025-11-21"),
        ("2025-11-21T00:00:00+07:00", "2025-11-21"),
        (None, None),
        ("", None),
    ],
)
def test_extract_date_only(raw, expected):
    assert extract_date_only(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("14:30", "14:30:00"),
        ("14:30:15", "14:30:15"),
        ("2025-11-21T14:00:00+07:00", "14:00:00"),
        ("jam sembilan", None),
        (None, None),
    ],
)
def test_extract_time_only(raw, expected):
    assert extract_time_only(raw) == expected


def test_compose_defaults_to_today_end_of_day():
    assert compose_due_timestamp(today=date(2025, 1, 2)) == "2025-01-02 23:59:00"


def test_compose_defaults_to_system_date():
    assert compose_due_timestamp() == f"{date.today().isoformat()} 23:59:00"


def test_compose_with_date_and_time():
    assert compose_due_timestamp("2025-11-21T00:00:00+07:00", "2025-11-21T08:15:00+07:00") == "2025-11-21 08:15:00"
    assert compose_due_timestamp("2025-11-21", None) == "2025-11-21 23:59:00"


def test_parse_due_timestamp_rejects_impossible_dates():
    assert parse_due_timestamp("2025-11-21 23:59:00") == datetime(2025, 11, 21, 23, 59)
    assert parse_due_timestamp("2025-13-40 23:59:00") is None
    assert parse_due_timestamp("2025-11-21 25:61:00") is None
    assert parse_due_timestamp(None) is None


def test_parse_day():
    assert parse_day("2024-02-29") == date(2024, 2, 29)
    assert parse_day("2025-02-29") is None


def test_day_bounds():
    start, end = day_bounds(date(2025, 11, 21))
    assert start == datetime(2025, 11, 21, 0, 0, 0)
    assert end == datetime(2025, 11, 21, 23, 59, 59)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("rendah", "low"),
        ("low", "low"),
        ("sedang", "medium"),
        ("medium", "medium"),
        ("tinggi", "high"),
        ("High", "high"),
        ("urgent", "high"),
        ("kritis", "medium"),
        (None, "medium"),
    ],
)
def test_map_priority(raw, expected):
    assert map_priority(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("todo", "todo"),
        ("to do", "todo"),
        ("belum", "todo"),
        ("in progress", "in_progress"),
        ("progres", "in_progress"),
        ("proses", "in_progress"),
        ("in_progress", "in_progress"),
        ("done", "done"),
        ("Selesai", "done"),
        ("beres", "done"),
        ("nanti", "todo"),
        (None, "todo"),
    ],
)
def test_map_status(raw, expected):
    assert map_status(raw) == expected


@pytest.mark.parametrize("raw", ["Thursday", "Tomorrow", "besok", "21/11/2025"])
def test_extract_date_only_passes_words_through(raw):
    assert extract_date_only(raw) == raw
    assert parse_day(extract_date_only(raw)) is None
    assert parse_due_timestamp(compose_due_timestamp(raw, None)) is None


def test_as_string_joins_list_parameters():
    assert as_string(["Laporan"]) == "Laporan"
    assert as_string(["Fisika", "Kimia"]) == "Fisika,Kimia"
    assert as_string([]) == ""
