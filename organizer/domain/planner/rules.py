from __future__ import annotations

from typing import Optional

from organizer.constants import (
    TASK_PRIORITY_HIGH,
    TASK_PRIORITY_LOW,
    VALID_PROJECT_PRIORITIES,
    VALID_STATUSES,
)
from organizer.domain.common.errors import ValidationError
from organizer.domain.common.time import parse_due_date


def validate_title(title: Optional[str]) -> str:
    if not title or not title.strip():
        raise ValidationError("Title is required.")
    if len(title.strip()) > 500:
        raise ValidationError("Title is too long (max 500 chars).")
    return title.strip()


def validate_status(status: str) -> str:
    if status not in VALID_STATUSES:
        raise ValidationError(f"Invalid status '{status}', expected one of: {', '.join(VALID_STATUSES)}.")
    return status


def validate_project_priority(priority: str) -> str:
    if priority not in VALID_PROJECT_PRIORITIES:
        raise ValidationError(
            f"Invalid priority '{priority}', expected one of: {', '.join(VALID_PROJECT_PRIORITIES)}."
        )
    return priority


def validate_task_priority(priority: Optional[int]) -> Optional[int]:
    if priority is None:
        return None
    if not TASK_PRIORITY_LOW <= priority <= TASK_PRIORITY_HIGH:
        raise ValidationError(f"Task priority must be between {TASK_PRIORITY_LOW} and {TASK_PRIORITY_HIGH}.")
    return priority


def validate_due_date(due_date: Optional[str]) -> Optional[str]:
    if due_date is None or not due_date.strip():
        return None
    if parse_due_date(due_date) is None:
        raise ValidationError(f"Invalid due date '{due_date}'.")
    return due_date.strip()
