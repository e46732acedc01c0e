import logging
from typing import List

from fastapi import APIRouter, Path

from planner import schemas
from planner.services import project_service

logger = logging.getLogger("planner.routes.projects")
router = APIRouter()


@router.get("/{owner_id}", response_model=List[schemas.ProjectOut], summary="List a user's projects")
async def list_projects(owner_id: str = Path(..., description="Owner id from the identity provider")):
    return await project_service.list_projects(owner_id)


@router.post("", response_model=schemas.ProjectOut, status_code=201, summary="Create a project")
async def create_project(payload: schemas.ProjectCreate):
    return await project_service.create_project(payload)


@router.put("/{project_id}", response_model=schemas.ProjectOut, summary="Update a project")
async def update_project(payload: schemas.ProjectUpdate, project_id: str = Path(...)):
    return await project_service.update_project(project_id, payload)


@router.delete(
    "/{project_id}",
    response_model=schemas.MessageResponse,
    summary="Delete a project",
    description="Deleting an unknown id also succeeds. Linked tasks are kept.",
)
async def delete_project(project_id: str = Path(...)):
    await project_service.delete_project(project_id)
    return {"message": "Project deleted successfully"}
