"""Authentication service: login, token refresh, self sign-up."""

import logging
from typing import Dict

from jose import JWTError

from evalboard.auth.jwt import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    verify_password,
    verify_token,
)
from evalboard.core.config import settings
from evalboard.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from evalboard.models.user import User
from evalboard.repositories.teacher import TeacherRepository
from evalboard.repositories.user import UserRepository
from evalboard.schemas.shared import MessageResponse
from evalboard.schemas.user import Token, UserLogin, UserResponse, UserSignup
from evalboard.services.teacher import create_teacher_account
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service."""

    def __init__(self, user_repo: UserRepository, teacher_repo: TeacherRepository):
        self.user_repo = user_repo
        self.teacher_repo = teacher_repo

    def _issue_tokens(self, user: User) -> Token:
        token_data = {"sub": str(user.id), "email": user.email}
        return Token(
            access_token=create_access_token(token_data),
            refresh_token=create_refresh_token(token_data),
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=UserResponse.from_user_model(user),
        )

    async def login(self, login_data: UserLogin) -> Token:
        """Check credentials and issue an access/refresh token pair."""
        user = await self.user_repo.get_by_email(login_data.email)
        if not user or not verify_password(login_data.password, user.password):
            logger.warning(f"Failed login for {login_data.email}")
            raise AuthenticationError(get_message("auth", "invalid_credentials"))

        if not user.is_active():
            raise AuthenticationError(get_message("auth", "account_inactive"))

        await self.user_repo.update_last_login(user.id)
        logger.info(f"User {user.id} logged in")
        return self._issue_tokens(user)

    async def refresh_token(self, refresh_token: str) -> Token:
        """Issue a new token pair from a valid refresh token."""
        try:
            payload = verify_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
            user_id = int(payload.get("sub"))
        except (JWTError, TypeError, ValueError):
            raise AuthenticationError()

        user = await self.user_repo.get_by_id(user_id)
        if not user or not user.is_active():
            raise AuthenticationError()

        return self._issue_tokens(user)

    async def signup(self, signup_data: UserSignup) -> Token:
        """Self sign-up. The account is always a teacher account, created with its profile."""
        if await self.user_repo.email_exists(signup_data.email):
            raise ConflictError(get_message("user", "email_exists"))

        profile = signup_data.model_dump(exclude={"email", "password"})
        teacher = await create_teacher_account(
            self.user_repo, self.teacher_repo, signup_data.email, signup_data.password, profile
        )
        user = await self.user_repo.get_by_id(teacher.id)
        logger.info(f"User {user.id} signed up as teacher")
        return self._issue_tokens(user)

    async def logout(self) -> MessageResponse:
        return MessageResponse(message=get_message("auth", "logged_out"))

    async def get_current_user_info(self, current_user: Dict) -> UserResponse:
        user = await self.user_repo.get_by_id(current_user["id"])
        if not user:
            raise NotFoundError(get_message("user", "not_found"))
        return UserResponse.from_user_model(user)
