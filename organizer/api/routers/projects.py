"""
Project (planner board) API endpoints.

Deleting a project removes its tasks through the foreign-key cascade.
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from organizer.api.dependencies import get_planner
from organizer.api.schemas import MessageResponse, ProjectCreate, ProjectResponse, ProjectUpdate
from organizer.domain.planner.service import PlannerService

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectResponse])
async def list_projects(planner: PlannerService = Depends(get_planner)):
    """All projects, newest first."""
    projects = await planner.list_projects()
    return [ProjectResponse.from_project(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(body: ProjectCreate, planner: PlannerService = Depends(get_planner)):
    project = await planner.create_project(**body.model_dump())
    return ProjectResponse.from_project(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    body: ProjectUpdate,
    planner: PlannerService = Depends(get_planner),
):
    """Update the fields present in the body; omitted fields keep their value."""
    project = await planner.update_project(project_id, body.model_dump(exclude_unset=True))
    return ProjectResponse.from_project(project)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project_id: int, planner: PlannerService = Depends(get_planner)):
    await planner.delete_project(project_id)
    return MessageResponse(message="Project deleted")
