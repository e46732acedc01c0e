import logging
from typing import List

from fastapi import APIRouter, Path

from planner import schemas
from planner.services import journal_service

logger = logging.getLogger("planner.routes.journals")
router = APIRouter()


@router.get("/{owner_id}", response_model=List[schemas.JournalOut], summary="List a user's journal entries")
async def list_journals(owner_id: str = Path(..., description="Owner id from the identity provider")):
    return await journal_service.list_journals(owner_id)


@router.post("", response_model=schemas.JournalOut, status_code=201, summary="Create a journal entry")
async def create_journal(payload: schemas.JournalCreate):
    return await journal_service.create_journal(payload)


@router.put("/{journal_id}", response_model=schemas.JournalOut, summary="Update a journal entry")
async def update_journal(payload: schemas.JournalUpdate, journal_id: str = Path(...)):
    return await journal_service.update_journal(journal_id, payload)


@router.delete(
    "/{journal_id}",
    response_model=schemas.MessageResponse,
    summary="Delete a journal entry",
    description="Deleting an unknown id also succeeds.",
)
async def delete_journal(journal_id: str = Path(...)):
    await journal_service.delete_journal(journal_id)
    return {"message": "Journal deleted successfully"}
