"""Authentication endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.permissions import (
    get_current_user,
    get_optional_user,
    resolve_page_access,
)
from evalboard.core.config import settings
from evalboard.core.database import get_db
from evalboard.core.exceptions import AuthenticationError
from evalboard.models.enums import UserRole
from evalboard.repositories.teacher import TeacherRepository
from evalboard.repositories.user import UserRepository
from evalboard.schemas.shared import MessageResponse
from evalboard.schemas.user import PageAccessResponse, Token, UserLogin, UserResponse, UserSignup
from evalboard.services.auth import AuthService
from evalboard.utils.messages import get_message

router = APIRouter()


async def get_auth_service(session: AsyncSession = Depends(get_db)) -> AuthService:
    """Get auth service dependency."""
    return AuthService(UserRepository(session), TeacherRepository(session))


def _set_auth_cookies(response: Response, token_response: Token) -> None:
    response.set_cookie(
        key="access_token",
        value=token_response.access_token,
        max_age=token_response.expires_in,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN
    )
    response.set_cookie(
        key="refresh_token",
        value=token_response.refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN
    )


@router.post("/login", response_model=Token, summary="Login user")
async def login(
    login_data: UserLogin,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Login user with email and password.

    Returns access token, refresh token, and user information.
    Also sets both tokens as HttpOnly cookies.
    """
    token_response = await auth_service.login(login_data)
    _set_auth_cookies(response, token_response)
    return token_response


@router.post("/signup", response_model=Token, summary="Create a teacher account")
async def signup(
    signup_data: UserSignup,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Self sign-up.

    The new account always has the teacher role.
    """
    token_response = await auth_service.signup(signup_data)
    _set_auth_cookies(response, token_response)
    return token_response


@router.post("/refresh", response_model=Token, summary="Refresh access token")
async def refresh_token(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Refresh access token using the refresh token cookie.
    """
    refresh_token_str = request.cookies.get("refresh_token")

    if not refresh_token_str:
        raise AuthenticationError(get_message("auth", "refresh_missing"))

    token_response = await auth_service.refresh_token(refresh_token_str)
    _set_auth_cookies(response, token_response)
    return token_response


@router.post("/logout", response_model=MessageResponse, summary="Logout user")
async def logout(
    response: Response,
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Logout current user.

    Clears authentication cookies.
    """
    response.delete_cookie(
        key="access_token",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN
    )
    response.delete_cookie(
        key="refresh_token",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN
    )

    return await auth_service.logout()


@router.get("/me", response_model=UserResponse, summary="Get current user info")
async def get_me(
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Get current authenticated user information, including the role.
    """
    return await auth_service.get_current_user_info(current_user)


@router.get("/page-access", response_model=PageAccessResponse, summary="Check access to a page")
async def page_access(
    roles: Optional[List[UserRole]] = Query(None, description="Roles the page requires; all roles when omitted"),
    current_user: Optional[dict] = Depends(get_optional_user),
):
    """
    Page access gate.

    Never fails with 401/403; it reports the state and where the client
    should redirect instead.
    """
    required_roles = roles or list(UserRole)
    access = resolve_page_access(current_user, required_roles)
    return PageAccessResponse(
        state=access.state.value,
        redirect_to=access.redirect_to,
        role=current_user["role"] if current_user else None,
        required_roles=required_roles,
    )
