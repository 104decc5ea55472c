"""
Constants for planner statuses, priorities and notification defaults.
"""
from __future__ import annotations

# Project / task status (board columns)
STATUS_TODO = "todo"
STATUS_IN_PROGRESS = "in-progress"
STATUS_DONE = "done"
VALID_STATUSES = (STATUS_TODO, STATUS_IN_PROGRESS, STATUS_DONE)

# Project priority
PROJECT_PRIORITY_LOW = "low"
PROJECT_PRIORITY_MEDIUM = "medium"
PROJECT_PRIORITY_HIGH = "high"
VALID_PROJECT_PRIORITIES = (PROJECT_PRIORITY_LOW, PROJECT_PRIORITY_MEDIUM, PROJECT_PRIORITY_HIGH)

# Task priority (numeric, optional)
TASK_PRIORITY_LOW = 1
TASK_PRIORITY_NORMAL = 2
TASK_PRIORITY_HIGH = 3

# Notes
DEFAULT_NOTE_CATEGORY = "allgemein"
ALL_NOTES_CATEGORY = "alle"

# Notification trigger names
TRIGGER_MORNING = "morning"
TRIGGER_EVENING = "evening"

# Notification defaults (cron: minute hour day month weekday)
DEFAULT_TIMEZONE = "Europe/Berlin"
DEFAULT_MORNING_SCHEDULE = "0 10 * * *"
DEFAULT_EVENING_SCHEDULE = "0 22 * * *"

# Uploads
MAX_UPLOAD_BYTES = 50 * 1024 * 1024
HERO_IMAGE_NAME = "hero-image.jpg"
