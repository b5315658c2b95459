"""Tasks: daily employee checklists and the admin task board.

Example:
    >>> from datetime import date, datetime
    >>> from backoffice_core.tasks import checklist_progress, complete_task, create_task
    >>> task = create_task("e1", "Limpiar barra", date(2025, 3, 10))
    >>> done = complete_task(task, "Ana", datetime(2025, 3, 10, 18, 30))
    >>> done.completed_at
    '18:30'
    >>> checklist_progress([done], "e1")
    100.0
"""

from backoffice_core.tasks.board import (
    board_columns,
    can_verify,
    create_admin_task,
    request_review,
    start_task,
    verify_task,
)
from backoffice_core.tasks.checklist import (
    checklist_progress,
    complete_task,
    create_task,
    employee_tasks,
    finalize_checklist,
    reset_task,
    skip_task,
)
from backoffice_core.tasks.models import (
    AdminTask,
    AdminTaskStatus,
    ChecklistSnapshot,
    Task,
    TaskPriority,
    TaskStatus,
)

__all__ = [
    "AdminTask",
    "AdminTaskStatus",
    "ChecklistSnapshot",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "board_columns",
    "can_verify",
    "checklist_progress",
    "complete_task",
    "create_admin_task",
    "create_task",
    "employee_tasks",
    "finalize_checklist",
    "request_review",
    "reset_task",
    "skip_task",
    "start_task",
    "verify_task",
]
