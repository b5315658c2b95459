"""Admin task board.

Tasks move one column at a time: PENDING, IN_PROGRESS, REVIEW, DONE.
Whoever sends a task to review is recorded as ``completed_by``; a different
user has to verify it to close it.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime

from backoffice_core.exceptions import TaskStateError, ValidationError
from backoffice_core.tasks.config import DEFAULT_ESTIMATED_TIME
from backoffice_core.tasks.models import AdminTask, AdminTaskStatus, TaskPriority

logger = logging.getLogger(__name__)


def create_admin_task(
    title: str,
    created_by: str,
    assigned_to: str | None = None,
    description: str = "",
    priority: TaskPriority = TaskPriority.MEDIUM,
    estimated_time: str = "",
    due_date: date | None = None,
    task_id: str | None = None,
) -> AdminTask:
    """Create a PENDING board task, assigned to its creator by default.

    Raises:
        ValidationError: If the title is empty.

    """
    if not title or not title.strip():
        raise ValidationError("An admin task needs a title")
    return AdminTask(
        id=task_id or str(uuid.uuid4()),
        title=title.strip(),
        description=description,
        assigned_to=assigned_to or created_by,
        created_by=created_by,
        priority=TaskPriority(priority),
        estimated_time=estimated_time or DEFAULT_ESTIMATED_TIME,
        due_date=due_date,
    )


def _require(task: AdminTask, status: AdminTaskStatus) -> None:
    if task.status != status:
        raise TaskStateError(
            f"Admin task {task.id} is {task.status.value}, expected {status.value}"
        )


def start_task(task: AdminTask) -> AdminTask:
    """PENDING -> IN_PROGRESS.

    Raises:
        TaskStateError: If the task is not PENDING.

    """
    _require(task, AdminTaskStatus.PENDING)
    return replace(task, status=AdminTaskStatus.IN_PROGRESS)


def request_review(task: AdminTask, user_id: str) -> AdminTask:
    """IN_PROGRESS -> REVIEW, recording who did the work.

    Raises:
        TaskStateError: If the task is not IN_PROGRESS.

    """
    _require(task, AdminTaskStatus.IN_PROGRESS)
    return replace(task, status=AdminTaskStatus.REVIEW, completed_by=user_id)


def can_verify(task: AdminTask, user_id: str) -> bool:
    return task.status == AdminTaskStatus.REVIEW and task.completed_by != user_id


def verify_task(task: AdminTask, user_id: str, now: datetime) -> AdminTask:
    """REVIEW -> DONE, verified by someone other than who did the work.

    Raises:
        TaskStateError: If the task is not in REVIEW, or ``user_id`` is the
            one who sent it to review.

    """
    _require(task, AdminTaskStatus.REVIEW)
    if task.completed_by == user_id:
        raise TaskStateError(f"Admin task {task.id} cannot be verified by who completed it")
    logger.info("Admin task %s verified by %s", task.id, user_id)
    return replace(task, status=AdminTaskStatus.DONE, verified_by=user_id, verified_at=now)


def board_columns(tasks: Iterable[AdminTask]) -> dict[AdminTaskStatus, list[AdminTask]]:
    """Group tasks by status, with every column present."""
    columns: dict[AdminTaskStatus, list[AdminTask]] = {s: [] for s in AdminTaskStatus}
    for task in tasks:
        columns[task.status].append(task)
    return columns
