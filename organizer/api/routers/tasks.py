"""Task API endpoints. Tasks always belong to an existing project."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from organizer.api.dependencies import get_planner
from organizer.api.schemas import MessageResponse, TaskCreate, TaskResponse, TaskUpdate
from organizer.domain.planner.service import PlannerService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    project_id: Optional[int] = Query(None, description="Filter by project"),
    planner: PlannerService = Depends(get_planner),
):
    tasks = await planner.list_tasks(project_id)
    return [TaskResponse.from_task(t) for t in tasks]


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(body: TaskCreate, planner: PlannerService = Depends(get_planner)):
    task = await planner.create_task(
        title=body.title,
        project_id=body.project_id,
        description=body.description,
        status=body.status,
        due_date=body.due_date,
        priority=body.priority,
        result=body.result,
        images=tuple(body.images),
    )
    return TaskResponse.from_task(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: int, body: TaskUpdate, planner: PlannerService = Depends(get_planner)):
    task = await planner.update_task(task_id, body.model_dump(exclude_unset=True))
    return TaskResponse.from_task(task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(task_id: int, planner: PlannerService = Depends(get_planner)):
    await planner.delete_task(task_id)
    return MessageResponse(message="Task deleted")
