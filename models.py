# models.py
from __future__ import annotations

from sqlalchemy import (
    create_engine,
    Column,
    Integer,
    String,
    DateTime,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()

PRIORITIES = ("low", "medium", "high")
STATUSES = ("todo", "in_progress", "done")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    course = Column(String(255), nullable=False, index=True)
    due_at = Column(DateTime, nullable=False, index=True)

    # Free-text columns; the closed value sets live in normalize.py
    priority = Column(String(20), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="todo", index=True)

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<Task(id={self.id!r}, title={self.title!r}, course={self.course!r}, "
            f"due_at={self.due_at!r}, priority={self.priority!r}, status={self.status!r})>"
        )

    @property
    def due_display(self) -> str:
        """'YYYY-MM-DD HH:MM', the format replies show."""
        return self.due_at.strftime("%Y-%m-%d %H:%M") if self.due_at else ""


def make_engine(database_url: str, pool_size: int = 10) -> Engine:
    """
    Build the process-wide engine.
    SQLite gets a single shared connection (in-memory databases vanish
    otherwise); server databases get a fixed-size pool with no overflow.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_size=pool_size, max_overflow=0)


def init_db(engine: Engine) -> None:
    """Creates the tasks table if it doesn't exist (development databases)."""
    Base.metadata.create_all(bind=engine)
