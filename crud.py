# crud.py

from datetime import datetime as _dt
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Task


# ------------------------
# WRITE operations
# ------------------------

def create_task(
    db: Session,
    user_id: str,
    title: str,
    course: str,
    due_at: _dt,
    priority: str,
) -> Task:
    """Insert one task; new tasks always start as 'todo'."""
    task = Task(
        user_id=user_id,
        title=title,
        course=course,
        due_at=due_at,
        priority=priority,
        status="todo",
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_status_by_title(db: Session, user_id: str, title: str, status: str) -> int:
    """
    Set status on every task whose title matches case-insensitively.
    Returns the number of rows changed (0 means not found).
    """
    count = (
        db.query(Task)
        .filter(
            Task.user_id == user_id,
            func.lower(Task.title) == title.lower(),
        )
        .update({Task.status: status}, synchronize_session=False)
    )
    db.commit()
    return int(count or 0)


# ------------------------
# READ operations
# ------------------------

def get_open_tasks_by_course(db: Session, user_id: str, course: str) -> List[Task]:
    """Unfinished tasks for one course (case-insensitive), earliest deadline first."""
    return (
        db.query(Task)
        .filter(
            Task.user_id == user_id,
            func.lower(Task.course) == course.lower(),
            Task.status != "done",
        )
        .order_by(Task.due_at.asc())
        .all()
    )


def get_open_tasks_between(db: Session, user_id: str, start: _dt, end: _dt) -> List[Task]:
    """Unfinished tasks due within [start, end], earliest deadline first."""
    return (
        db.query(Task)
        .filter(
            Task.user_id == user_id,
            Task.due_at.between(start, end),
            Task.status != "done",
        )
        .order_by(Task.due_at.asc())
        .all()
    )


def list_tasks(
    db: Session,
    user_id: str,
    *,
    start: _dt = None,
    end: _dt = None,
    course: str = None,
    include_done: bool = False,
    limit: int = 200,
) -> List[Task]:
    """Generic listing used by the inspect_db CLI."""
    q = db.query(Task).filter(Task.user_id == user_id)
    if start is not None:
        q = q.filter(Task.due_at >= start)
    if end is not None:
        q = q.filter(Task.due_at <= end)
    if course:
        q = q.filter(func.lower(Task.course) == course.lower())
    if not include_done:
        q = q.filter(Task.status != "done")
    return q.order_by(Task.due_at.asc(), Task.id.asc()).limit(limit).all()
