"""Daily employee checklists.

A checklist task starts PENDING and is either completed or skipped, which
stamps the time and who did it. Resetting a task back to PENDING clears
the stamp. Finalizing the day archives an employee's tasks into a
``ChecklistSnapshot`` and takes them off the board.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime

from backoffice_core.exceptions import TaskStateError, ValidationError
from backoffice_core.tasks.config import DEFAULT_ASSIGNED_BY, DEFAULT_FINALIZED_BY
from backoffice_core.tasks.models import ChecklistSnapshot, Task, TaskStatus
from backoffice_core.timeutils import clock, time_to_minutes

logger = logging.getLogger(__name__)


def create_task(
    employee_id: str,
    description: str,
    day: date,
    assigned_by: str = DEFAULT_ASSIGNED_BY,
    details: str | None = None,
    task_id: str | None = None,
) -> Task:
    """Create a PENDING checklist task.

    Raises:
        ValidationError: If the description is empty.

    """
    if not description or not description.strip():
        raise ValidationError("A task needs a description")
    return Task(
        id=task_id or str(uuid.uuid4()),
        employee_id=employee_id,
        description=description.strip(),
        assigned_by=assigned_by,
        date=day,
        details=details,
    )


def _stamp(task: Task, status: TaskStatus, done_by: str, now: datetime, at: str | None) -> Task:
    if task.status != TaskStatus.PENDING:
        raise TaskStateError(f"Task {task.id} is {task.status.value}, not PENDING")
    if at:
        try:
            time_to_minutes(at)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    return replace(task, status=status, completed_at=at or clock(now), completed_by=done_by)


def complete_task(task: Task, completed_by: str, now: datetime, at: str | None = None) -> Task:
    """Mark a PENDING task as done.

    Args:
        task: Task to complete.
        completed_by: Name of whoever did it.
        now: Current time, stamped as ``"HH:MM"`` unless ``at`` is given.
        at: Time typed by the operator, ``"HH:MM"``.

    Raises:
        TaskStateError: If the task is not PENDING.
        ValidationError: If ``at`` is not ``HH:MM``.

    """
    return _stamp(task, TaskStatus.COMPLETED, completed_by, now, at)


def skip_task(task: Task, skipped_by: str, now: datetime) -> Task:
    """Mark a PENDING task as not done.

    Raises:
        TaskStateError: If the task is not PENDING.

    """
    return _stamp(task, TaskStatus.SKIPPED, skipped_by, now, None)


def reset_task(task: Task) -> Task:
    return replace(task, status=TaskStatus.PENDING, completed_at=None, completed_by=None)


def employee_tasks(tasks: Iterable[Task], employee_id: str) -> list[Task]:
    return [t for t in tasks if t.employee_id == employee_id]


def checklist_progress(tasks: Iterable[Task], employee_id: str) -> float:
    """Percentage (0 to 100) of an employee's tasks that are COMPLETED.

    Skipped tasks count as not done. An empty checklist is at 0.
    """
    mine = employee_tasks(tasks, employee_id)
    if not mine:
        return 0.0
    done = sum(1 for t in mine if t.status == TaskStatus.COMPLETED)
    return done / len(mine) * 100


def finalize_checklist(
    tasks: Iterable[Task],
    employee_id: str,
    finalized_by: str | None,
    now: datetime,
    snapshot_id: str | None = None,
) -> tuple[ChecklistSnapshot, list[Task]]:
    """Archive an employee's checklist for the day.

    Args:
        tasks: Every task on the board.
        employee_id: Employee whose checklist is finalized.
        finalized_by: Name of whoever finalizes; defaults to "Sistema".
        now: Finalization time.
        snapshot_id: Optional explicit id.

    Returns:
        The snapshot, and the board without that employee's tasks.

    Raises:
        ValidationError: If the employee has no tasks.

    """
    tasks = list(tasks)
    mine = employee_tasks(tasks, employee_id)
    if not mine:
        raise ValidationError(f"Employee {employee_id} has no tasks to finalize")

    snapshot = ChecklistSnapshot(
        id=snapshot_id or str(uuid.uuid4()),
        date=now.date(),
        finalized_at=clock(now),
        finalized_by=finalized_by or DEFAULT_FINALIZED_BY,
        employee_id=employee_id,
        tasks=mine,
    )
    pending = sum(1 for t in mine if t.status == TaskStatus.PENDING)
    if pending:
        logger.warning(
            "Checklist for %s finalized with %d pending tasks", employee_id, pending
        )
    logger.info("Finalized checklist %s for %s (%d tasks)", snapshot.id, employee_id, len(mine))
    return snapshot, [t for t in tasks if t.employee_id != employee_id]
