"""User management endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.permissions import log_access_attempt, supervisor_required
from evalboard.core.database import get_db
from evalboard.repositories.user import UserRepository
from evalboard.schemas.shared import MessageResponse
from evalboard.schemas.user import SupervisorSummary, UserResponse
from evalboard.services.user import UserService

router = APIRouter()


async def get_user_service(session: AsyncSession = Depends(get_db)) -> UserService:
    """Get user service dependency."""
    user_repo = UserRepository(session)
    return UserService(user_repo)


@router.get("/supervisors", response_model=List[SupervisorSummary], summary="List supervisors")
async def list_supervisors(
    current_user: dict = Depends(supervisor_required),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.list_supervisors()


@router.delete("/supervisors/{user_id}", response_model=MessageResponse, summary="Remove a supervisor")
async def remove_supervisor(
    user_id: int,
    current_user: dict = Depends(supervisor_required),
    user_service: UserService = Depends(get_user_service),
):
    """
    Remove another supervisor's account. Removing yourself is refused.
    """
    await log_access_attempt(current_user, f"users/supervisors/{user_id}", action="delete")
    return await user_service.remove_supervisor(user_id, current_user)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user by ID")
async def get_user(
    user_id: int,
    current_user: dict = Depends(supervisor_required),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_user(user_id)
