# handlers/tasks.py
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date as _date
from typing import Any, Callable, Dict, Mapping, Optional

from database import TaskStoreError
from normalize import (
    as_string,
    compose_due_timestamp,
    day_bounds,
    extract_date_only,
    map_priority,
    map_status,
    normalize_intent_name,
    parse_day,
    parse_due_timestamp,
)

logger = logging.getLogger(__name__)

ADD_TASK = {"add_task", "tambah_tugas", "tambah tugas"}
LIST_BY_COURSE = {"list_tasks_by_course", "course", "tugas_per_mata_kuliah"}
LIST_BY_DATE = {"list_tasks_by_date", "tugas_per_tanggal", "tugas_hari_ini"}
UPDATE_STATUS = {"update_status", "ubah_status_tugas", "ubah status tugas"}

SERVER_ERROR_TEXT = "Terjadi error pada server."


class Outcome(enum.Enum):
    SUCCESS = "success"
    VALIDATION_GAP = "validation_gap"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"
    UNHANDLED = "unhandled"


@dataclass(frozen=True)
class Fulfillment:
    text: str
    outcome: Outcome


def _bullet(lines) -> str:
    return "\n".join(f"• {line}" for line in lines)


class TaskIntentDispatcher:
    """
    Routes a normalized intent name to one of the task operations and
    renders the reply. Business outcomes never raise; store failures are
    caught here and reported as STORE_FAILURE.
    """

    def __init__(self, gateway, user_id: str = "demo", today: Callable[[], _date] = _date.today):
        self.gateway = gateway
        self.user_id = user_id
        self.today = today
        self._routes = {}
        for names, fn in (
            (ADD_TASK, self.add_task),
            (LIST_BY_COURSE, self.list_by_course),
            (LIST_BY_DATE, self.list_by_date),
            (UPDATE_STATUS, self.update_status),
        ):
            for name in names:
                self._routes[name] = fn

    def handle(self, intent_name: Any, parameters: Optional[Mapping[str, Any]] = None) -> Fulfillment:
        intent = normalize_intent_name(intent_name)
        params: Dict[str, Any] = dict(parameters or {})
        fn = self._routes.get(intent)
        logger.debug("Dispatch intent=%r handler=%s keys=%s", intent, getattr(fn, "__name__", None), list(params))

        if fn is None:
            return Fulfillment(
                "Webhook sudah menerima pesan, tapi intent ini belum di-handle di server.",
                Outcome.UNHANDLED,
            )
        try:
            return fn(params)
        except TaskStoreError:
            logger.exception("Store failure while handling intent %r", intent)
            return Fulfillment(SERVER_ERROR_TEXT, Outcome.STORE_FAILURE)

    # ---- branches ----

    def add_task(self, params: Dict[str, Any]) -> Fulfillment:
        title = as_string(params.get("title")).strip() or "Tanpa judul"
        course = as_string(params.get("course")).strip() or "Umum"
        priority = map_priority(params.get("priority"))
        due_text = compose_due_timestamp(
            params.get("due_date") or None,
            params.get("due_time") or None,
            today=self.today(),
        )
        due_at = parse_due_timestamp(due_text)
        if due_at is None:
            return Fulfillment(
                "Tanggal atau jam deadline tidak valid. Coba sebutkan lagi, misalnya: 2025-11-21 jam 14:00.",
                Outcome.VALIDATION_GAP,
            )

        self.gateway.add_task(self.user_id, title, course, due_at, priority)
        return Fulfillment(
            f'Siap! Tugas "{title}" untuk {course} sudah disimpan dengan deadline {due_text}.',
            Outcome.SUCCESS,
        )

    def list_by_course(self, params: Dict[str, Any]) -> Fulfillment:
        course = as_string(params.get("course")).strip()
        if not course:
            return Fulfillment(
                "Mata kuliahnya apa? Misalnya: Kalkulus, Fisika Dasar, dst.",
                Outcome.VALIDATION_GAP,
            )

        tasks = self.gateway.open_tasks_by_course(self.user_id, course)
        if not tasks:
            return Fulfillment(
                f"Belum ada tugas (atau semua sudah selesai) untuk mata kuliah {course}.",
                Outcome.SUCCESS,
            )
        body = _bullet(
            f"{t.title} — {t.due_display} (prioritas: {t.priority}, status: {t.status})" for t in tasks
        )
        return Fulfillment(f"Tugas {course} yang belum selesai:\n{body}", Outcome.SUCCESS)

    def list_by_date(self, params: Dict[str, Any]) -> Fulfillment:
        raw = params.get("date") or params.get("due_date")
        day_text = extract_date_only(raw) or self.today().isoformat()
        day = parse_day(day_text)
        if day is None:
            return Fulfillment(
                f"Tanggal {day_text} tidak valid. Coba sebutkan tanggal lain.",
                Outcome.VALIDATION_GAP,
            )

        start, end = day_bounds(day)
        tasks = self.gateway.open_tasks_between(self.user_id, start, end)
        if not tasks:
            return Fulfillment(
                f"Tidak ada tugas yang belum selesai pada tanggal {day_text}.",
                Outcome.SUCCESS,
            )
        body = _bullet(
            f"{t.title} [{t.course}] — {t.due_display} (prioritas: {t.priority})" for t in tasks
        )
        return Fulfillment(f"Tugas yang belum selesai pada {day_text}:\n{body}", Outcome.SUCCESS)

    def update_status(self, params: Dict[str, Any]) -> Fulfillment:
        title = as_string(params.get("title")).strip()
        if not title:
            return Fulfillment(
                "Tolong sebutkan judul tugas yang ingin diubah statusnya, misalnya: laporan praktikum.",
                Outcome.VALIDATION_GAP,
            )

        status = map_status(params.get("status"))
        changed = self.gateway.update_status(self.user_id, title, status)
        if not changed:
            return Fulfillment(
                f'Tugas dengan judul "{title}" tidak ditemukan di database.',
                Outcome.NOT_FOUND,
            )
        return Fulfillment(
            f'Status tugas "{title}" sudah diubah menjadi {status}.',
            Outcome.SUCCESS,
        )
