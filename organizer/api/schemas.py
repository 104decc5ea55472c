"""
Pydantic schemas for API request/response validation.

Create schemas keep required fields optional on purpose: the planner rules
produce the descriptive 400 message ("Title is required.") instead of a
generic schema error.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from organizer.domain.planner.models import Project, Task


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Project Schemas
# =============================================================================

class ProjectCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None  # todo, in-progress, done
    priority: Optional[str] = None  # low, medium, high
    linked_event_id: Optional[int] = None
    due_date: Optional[str] = None
    color: Optional[str] = None


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    linked_event_id: Optional[int] = None
    due_date: Optional[str] = None
    color: Optional[str] = None


class ProjectResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    linked_event_id: Optional[int] = None
    due_date: Optional[str] = None
    color: Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_project(cls, project: Project) -> "ProjectResponse":
        return cls(**project.__dict__)


# =============================================================================
# Task Schemas
# =============================================================================

class TaskCreate(BaseModel):
    title: Optional[str] = None
    project_id: Optional[int] = None
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[int] = None  # 1 low, 2 normal, 3 high
    result: Optional[str] = None
    images: List[str] = []


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    project_id: Optional[int] = None
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[int] = None
    result: Optional[str] = None
    images: Optional[List[str]] = None


class TaskResponse(BaseModel):
    id: int
    project_id: int
    title: str
    description: Optional[str] = None
    status: str
    due_date: Optional[str] = None
    priority: Optional[int] = None
    result: Optional[str] = None
    resolved_result: Optional[str] = None
    content: str = ""
    images: List[str] = []
    created_at: str
    updated_at: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            project_id=task.project_id,
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date,
            priority=task.priority,
            result=task.result,
            resolved_result=task.resolved_result(),
            content=task.render_content(),
            images=list(task.images),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


# =============================================================================
# Calendar Event Schemas
# =============================================================================

class EventCreate(BaseModel):
    title: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    end_date: Optional[str] = None  # multi-day events
    is_recurring: bool = False
    recurrence_type: Optional[str] = None


class EventUpdate(BaseModel):
    title: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    end_date: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurrence_type: Optional[str] = None


class EventImage(BaseModel):
    filename: str
    path: str


class EventResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    date: str
    end_date: Optional[str] = None
    is_recurring: bool = False
    recurrence_type: Optional[str] = None
    images: List[EventImage] = []
    created_at: str
    updated_at: str


# =============================================================================
# Note Schemas (bodies arrive as multipart forms, see routers/notes.py)
# =============================================================================

class NoteResponse(BaseModel):
    id: int
    title: str
    content: str
    category: str
    priority: int
    is_favorite: bool
    tags: str = ""
    image_path: Optional[str] = None
    created_at: str
    updated_at: str


# =============================================================================
# Image Schemas
# =============================================================================

class ImageResponse(BaseModel):
    id: int
    filename: str
    original_name: str
    path: str
    size: Optional[int] = None
    mime_type: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None


class HeroImageResponse(BaseModel):
    success: bool
    message: str
    image_path: str
    original_name: str
    size: int


# =============================================================================
# Relationship Schemas
# =============================================================================

class RelationshipCreate(BaseModel):
    name: Optional[str] = None
    relationship_type: Optional[str] = None
    description: Optional[str] = None
    anniversary_date: Optional[str] = None
    image_id: Optional[int] = None


class RelationshipResponse(BaseModel):
    id: int
    name: str
    relationship_type: Optional[str] = None
    description: Optional[str] = None
    anniversary_date: Optional[str] = None
    image_id: Optional[int] = None
    image_filename: Optional[str] = None
    image_path: Optional[str] = None


# =============================================================================
# Baby Savings Schemas
# =============================================================================

class SavingsUpdate(BaseModel):
    balance: Optional[float] = None
    goal: Optional[float] = None


class SavingsResponse(BaseModel):
    balance: float
    goal: Optional[float] = None
    updated_at: Optional[str] = None


class BabyItemResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    category: Optional[str] = None
    is_purchased: bool
    link: Optional[str] = None
    image_path: Optional[str] = None
    created_at: str
    updated_at: str


# =============================================================================
# Notification Schemas
# =============================================================================

class TelegramTestResponse(BaseModel):
    success: bool
    message: str


class SchedulerStatusResponse(BaseModel):
    enabled: bool
    active_jobs: List[str] = Field(default_factory=list, serialization_alias="activeJobs")
    timezone: str
    schedules: Dict[str, str] = {}


class ToggleRequest(BaseModel):
    enabled: bool


class ToggleResponse(BaseModel):
    enabled: bool
    message: str
