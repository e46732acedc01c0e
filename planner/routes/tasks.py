import logging
from typing import List

from fastapi import APIRouter, Path, Query

from planner import schemas
from planner.services import task_service

logger = logging.getLogger("planner.routes.tasks")
router = APIRouter()


@router.get("/{owner_id}", response_model=List[schemas.TaskOut], summary="List a user's tasks")
async def list_tasks(owner_id: str = Path(..., description="Owner id from the identity provider")):
    return await task_service.list_tasks(owner_id)


@router.post("", response_model=schemas.TaskOut, status_code=201, summary="Create a task")
async def create_task(payload: schemas.TaskCreate):
    return await task_service.create_task(payload)


@router.put("/{task_id}", response_model=schemas.TaskOut, summary="Update a task")
async def update_task(payload: schemas.TaskUpdate, task_id: str = Path(...)):
    return await task_service.update_task(task_id, payload)


@router.post("/{task_id}/complete", response_model=schemas.TaskOut, summary="Mark a task done or not done")
async def complete_task(task_id: str = Path(...), completed: bool = Query(True)):
    return await task_service.complete_task(task_id, completed)


@router.delete(
    "/{task_id}",
    response_model=schemas.MessageResponse,
    summary="Delete a task",
    description="Deleting an unknown id also succeeds.",
)
async def delete_task(task_id: str = Path(...)):
    await task_service.delete_task(task_id)
    return {"message": "Task deleted successfully"}
