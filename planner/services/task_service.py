import logging
from typing import List

from planner import crud, schemas
from planner.services.common import to_columns

logger = logging.getLogger("planner.services.task")


async def list_tasks(user_id: str) -> List:
    return await crud.get_tasks(user_id)


async def create_task(payload: schemas.TaskCreate):
    return await crud.create_task(to_columns(payload))


async def update_task(task_id: str, payload: schemas.TaskUpdate):
    return await crud.update_task(task_id, to_columns(payload, partial=True))


async def complete_task(task_id: str, completed: bool = True):
    return await crud.update_task(task_id, {"completed": completed})


async def delete_task(task_id: str) -> bool:
    return await crud.delete_task(task_id)
