from fastapi import APIRouter, HTTPException, Path

from planner import crud, schemas

router = APIRouter()


@router.put(
    "/{uid}",
    response_model=schemas.UserOut,
    summary="Sync a user from the identity provider",
    description="Creates the user on first sign-in and refreshes email/display name afterwards.",
)
async def sync_user(payload: schemas.UserSync, uid: str = Path(..., description="Identity provider uid")):
    return await crud.upsert_user(uid, payload.email, payload.display_name)


@router.get("/{uid}", response_model=schemas.UserOut, summary="Get a user")
async def get_user(uid: str = Path(...)):
    user = await crud.get_user(uid)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
