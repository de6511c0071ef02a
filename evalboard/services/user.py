"""User service: supervisor accounts."""

import logging
from typing import Dict, List

from evalboard.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from evalboard.models.enums import UserRole
from evalboard.repositories.user import UserRepository
from evalboard.schemas.shared import MessageResponse
from evalboard.schemas.user import SupervisorSummary, UserResponse
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)


class UserService:
    """User service."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def get_user(self, user_id: int) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(get_message("user", "not_found"))
        return UserResponse.from_user_model(user)

    async def list_supervisors(self) -> List[SupervisorSummary]:
        users = await self.user_repo.list_by_role(UserRole.SUPERVISOR)
        return [SupervisorSummary.model_validate(user) for user in users]

    async def remove_supervisor(self, user_id: int, current_user: Dict) -> MessageResponse:
        """Remove a supervisor's role record; nobody can remove themselves."""
        if user_id == current_user["id"]:
            raise AuthorizationError(get_message("access", "cannot_remove_self"))

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(get_message("user", "not_found"))
        if not user.is_supervisor():
            raise ValidationError(get_message("user", "not_supervisor", user_id=user_id))

        await self.user_repo.delete(user_id)
        logger.info(f"Supervisor {user_id} removed by user {current_user['id']}")
        return MessageResponse(message=get_message("user", "supervisor_removed"))
