"""User endpoints."""

from fastapi import APIRouter, status

from dairycart.api.deps import DbSession, deadline
from dairycart.schemas.user import UserCreationInput, UserResponse
from dairycart.services import users as users_service

router = APIRouter()


@router.post("/user", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(data: UserCreationInput, db: DbSession) -> UserResponse:
    """Create a user. The response never includes the password or salt."""
    async with deadline():
        user = await users_service.create_user(db, data)
    return UserResponse.from_record(user)


@router.delete("/user/{user_id}")
async def delete_user(user_id: int, db: DbSession) -> dict:
    async with deadline():
        await users_service.archive_user(db, user_id)
    return {"success": True, "id": user_id}
