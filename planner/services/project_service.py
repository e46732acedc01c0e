import logging
from typing import List

from planner import crud, schemas
from planner.services.common import to_columns

logger = logging.getLogger("planner.services.project")


async def list_projects(user_id: str) -> List:
    return await crud.get_projects(user_id)


async def create_project(payload: schemas.ProjectCreate):
    return await crud.create_project(to_columns(payload))


async def update_project(project_id: str, payload: schemas.ProjectUpdate):
    return await crud.update_project(project_id, to_columns(payload, partial=True))


async def delete_project(project_id: str) -> bool:
    # Tasks linked through project_id are left as they are
    return await crud.delete_project(project_id)
