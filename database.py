# database.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

import crud
from models import Task, init_db, make_engine

logger = logging.getLogger(__name__)


class TaskStoreError(RuntimeError):
    """Any failure talking to the task store (connectivity, constraints, bad SQL)."""


class TaskGateway:
    """
    Owns the pooled engine for the tasks store.

    Construct once at startup, call close() at shutdown. Every operation runs
    in its own short-lived session, so each statement is its own unit of work.
    """

    def __init__(self, database_url: str, pool_size: int = 10, engine: Optional[Engine] = None):
        self.engine = engine if engine is not None else make_engine(database_url, pool_size=pool_size)
        self._sessions = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings) -> "TaskGateway":
        return cls(settings.database_url, pool_size=settings.pool_size)

    def init_schema(self) -> None:
        init_db(self.engine)

    def close(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self._sessions()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            raise TaskStoreError(str(e)) from e
        finally:
            db.close()

    # ---- the four statement shapes ----

    def add_task(self, user_id: str, title: str, course: str, due_at: datetime, priority: str) -> Task:
        with self.session() as db:
            task = crud.create_task(db, user_id, title, course, due_at, priority)
            logger.info("Inserted task id=%s title=%r course=%r", task.id, title, course)
            return task

    def open_tasks_by_course(self, user_id: str, course: str) -> List[Task]:
        with self.session() as db:
            return crud.get_open_tasks_by_course(db, user_id, course)

    def open_tasks_between(self, user_id: str, start: datetime, end: datetime) -> List[Task]:
        with self.session() as db:
            return crud.get_open_tasks_between(db, user_id, start, end)

    def update_status(self, user_id: str, title: str, status: str) -> int:
        with self.session() as db:
            changed = crud.update_status_by_title(db, user_id, title, status)
            logger.info("Status update title=%r status=%s rows=%d", title, status, changed)
            return changed

    def list_tasks(self, user_id: str, **filters) -> List[Task]:
        with self.session() as db:
            return crud.list_tasks(db, user_id, **filters)
