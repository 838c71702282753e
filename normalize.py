# normalize.py
from __future__ import annotations

import re
from datetime import date as _date, datetime as _dt, time as _time
from typing import Any, Optional, Tuple

DEFAULT_DUE_TIME = "23:59:00"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_DATE_RE = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})")
_TIME_RE = re.compile(r"(\d{2}:\d{2}(?::\d{2})?)")

PRIORITY_SYNONYMS = {
    "rendah": "low",
    "low": "low",
    "sedang": "medium",
    "medium": "medium",
    "tinggi": "high",
    "high": "high",
    "urgent": "high",
}

STATUS_SYNONYMS = {
    "todo": "todo",
    "to do": "todo",
    "belum": "todo",
    "in progress": "in_progress",
    "progres": "in_progress",
    "proses": "in_progress",
    "in_progress": "in_progress",
    "done": "done",
    "selesai": "done",
    "beres": "done",
}


def normalize_intent_name(raw: Any) -> str:
    """'  Add_Task ' -> 'add_task'; None -> ''."""
    return as_string(raw).strip().lower()


def as_string(value: Any, fallback: str = "") -> str:
    if value is None:
        return fallback
    # Dialogflow list parameters: ["Laporan"] -> "Laporan", ["a", "b"] -> "a,b"
    if isinstance(value, (list, tuple)):
        return ",".join(as_string(v) for v in value)
    return str(value)


def extract_date_only(raw: Any) -> Optional[str]:
    """
    Keep only the leading YYYY-MM-DD of a date token.
    Dialogflow sends either '2025-11-21' or '2025-11-21T00:00:00+07:00'.
    """
    if raw is None:
        return None
    s = str(raw).strip()
    if not s:
        return None
    m = _DATE_RE.match(s)
    # non-ISO tokens ("Thursday", "besok") pass through for parse_day to reject
    return m.group(1) if m else s


def extract_time_only(raw: Any) -> Optional[str]:
    """First HH:MM or HH:MM:SS in the token, always returned as HH:MM:SS."""
    if raw is None:
        return None
    m = _TIME_RE.search(str(raw))
    if not m:
        return None
    t = m.group(1)
    if len(t) == 5:
        t += ":00"
    return t


def compose_due_timestamp(date: Any = None, time: Any = None, today: Optional[_date] = None) -> str:
    """Combine into 'YYYY-MM-DD HH:MM:SS', defaulting to today at 23:59:00."""
    day = extract_date_only(date) or (today or _date.today()).isoformat()
    clock = extract_time_only(time) or DEFAULT_DUE_TIME
    return f"{day} {clock}"


def parse_due_timestamp(text: Optional[str]) -> Optional[_dt]:
    """Strict parse of a composed timestamp; None for impossible dates or times."""
    if not text:
        return None
    try:
        return _dt.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        return None


def parse_day(text: Optional[str]) -> Optional[_date]:
    if not text:
        return None
    try:
        return _date.fromisoformat(text)
    except ValueError:
        return None


def day_bounds(day: _date) -> Tuple[_dt, _dt]:
    """[00:00:00, 23:59:59] of the given day."""
    return _dt.combine(day, _time(0, 0, 0)), _dt.combine(day, _time(23, 59, 59))


def map_priority(raw: Any) -> str:
    return PRIORITY_SYNONYMS.get(as_string(raw).strip().lower(), "medium")


def map_status(raw: Any) -> str:
    return STATUS_SYNONYMS.get(as_string(raw).strip().lower(), "todo")
