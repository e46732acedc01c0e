import logging
from typing import List

from planner import crud, schemas
from planner.services.common import to_columns

logger = logging.getLogger("planner.services.journal")


async def list_journals(user_id: str) -> List:
    return await crud.get_journals(user_id)


async def create_journal(payload: schemas.JournalCreate):
    return await crud.create_journal(to_columns(payload))


async def update_journal(journal_id: str, payload: schemas.JournalUpdate):
    return await crud.update_journal(journal_id, to_columns(payload, partial=True))


async def delete_journal(journal_id: str) -> bool:
    return await crud.delete_journal(journal_id)
