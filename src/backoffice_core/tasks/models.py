"""Task entities: daily checklist items, archived checklists, admin tasks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"


class AdminTaskStatus(str, Enum):
    """Board columns, walked in order: PENDING, IN_PROGRESS, REVIEW, DONE."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    REVIEW = "REVIEW"
    DONE = "DONE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class Task:
    """An item of an employee's daily checklist.

    Attributes:
        id: Task identifier.
        employee_id: Employee the task is assigned to.
        description: Short text shown on the checklist.
        assigned_by: Name of whoever assigned it.
        date: Day the task belongs to.
        status: PENDING, COMPLETED or SKIPPED.
        details: Optional longer instructions.
        completed_at: ``"HH:MM"`` the task was marked done or skipped.
        completed_by: Name of whoever marked it.
    """

    id: str
    employee_id: str
    description: str
    assigned_by: str
    date: date
    status: TaskStatus = TaskStatus.PENDING
    details: str | None = None
    completed_at: str | None = None
    completed_by: str | None = None


@dataclass(frozen=True)
class ChecklistSnapshot:
    """An employee's checklist as it stood when the day was finalized."""

    id: str
    date: date
    finalized_at: str
    finalized_by: str
    employee_id: str
    tasks: list[Task] = field(default_factory=list)


@dataclass(frozen=True)
class AdminTask:
    """A task on the management board.

    ``completed_by`` is set when the task is sent to review and
    ``verified_by``/``verified_at`` when another user closes it.
    """

    id: str
    title: str
    description: str
    assigned_to: str
    created_by: str
    status: AdminTaskStatus = AdminTaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    estimated_time: str = ""
    due_date: date | None = None
    completed_by: str | None = None
    verified_by: str | None = None
    verified_at: datetime | None = None
