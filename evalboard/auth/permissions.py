"""Role-based access gate for the evaluation dashboard."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.jwt import verify_token
from evalboard.core.config import settings
from evalboard.core.database import get_db
from evalboard.core.exceptions import AuthenticationError, AuthorizationError
from evalboard.models.enums import UserRole
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)


class AccessDecision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    UNAUTHENTICATED = "unauthenticated"


class PageAccessState(str, Enum):
    CHECKING_AUTH = "checking_auth"
    ALLOWED = "allowed"
    DENIED = "denied"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class PageAccess:
    state: PageAccessState
    redirect_to: Optional[str] = None


def _principal_role(principal: Optional[Dict]) -> Optional[UserRole]:
    if not principal:
        return None
    role = principal.get("role")
    if isinstance(role, UserRole):
        return role
    if isinstance(role, str) and UserRole.is_valid_role(role):
        return UserRole(role)
    return None


def authorize(principal: Optional[Dict], required_roles: Iterable[UserRole]) -> AccessDecision:
    """Decide access for a principal; None means nobody is signed in.

    A principal whose role is missing or unknown is denied, never allowed.
    """
    if principal is None:
        return AccessDecision.UNAUTHENTICATED
    role = _principal_role(principal)
    if role is not None and role in set(required_roles):
        return AccessDecision.ALLOW
    return AccessDecision.DENY


def resolve_page_access(
    principal: Optional[Dict],
    required_roles: Iterable[UserRole],
    loading: bool = False,
) -> PageAccess:
    """Page-level gate: nothing is decided while the identity is still loading."""
    if loading:
        return PageAccess(PageAccessState.CHECKING_AUTH)

    decision = authorize(principal, required_roles)
    if decision == AccessDecision.UNAUTHENTICATED:
        return PageAccess(PageAccessState.UNAUTHENTICATED, settings.LOGIN_PATH)
    if decision == AccessDecision.DENY:
        return PageAccess(PageAccessState.DENIED, settings.DEFAULT_LANDING_PATH)
    return PageAccess(PageAccessState.ALLOWED)


class JWTBearer(HTTPBearer):
    """Bearer token from the Authorization header, or the access_token cookie."""

    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=False)
        self.require_token = auto_error

    async def __call__(self, request: Request) -> Optional[str]:
        credentials = await super(JWTBearer, self).__call__(request)
        if credentials and credentials.credentials:
            return credentials.credentials

        access_token = request.cookies.get("access_token")
        if access_token:
            return access_token

        if self.require_token:
            raise AuthenticationError(get_message("auth", "login_required"))

        return None


jwt_bearer = JWTBearer()
optional_jwt_bearer = JWTBearer(auto_error=False)


async def _load_principal(token: str, session: AsyncSession) -> Dict:
    # Import here to avoid circular import
    from evalboard.repositories.user import UserRepository

    try:
        payload = verify_token(token)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise AuthenticationError()

    # The role is read from the store on every request, never from the token
    user = await UserRepository(session).get_by_id(user_id)
    if not user:
        raise AuthenticationError()

    if not user.is_active():
        raise AuthenticationError(get_message("auth", "account_inactive"))

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "is_active": user.is_active(),
    }


async def get_current_user(
    token: str = Depends(jwt_bearer),
    session: AsyncSession = Depends(get_db)
) -> Dict:
    """Get the current authenticated user from the JWT token."""
    return await _load_principal(token, session)


async def get_optional_user(
    token: Optional[str] = Depends(optional_jwt_bearer),
    session: AsyncSession = Depends(get_db)
) -> Optional[Dict]:
    """Current user, or None when the request carries no usable token."""
    if not token:
        return None
    try:
        return await _load_principal(token, session)
    except AuthenticationError:
        return None


def require_roles(required_roles: List[UserRole]):
    """
    Dependency factory to require specific roles.

    Args:
        required_roles: Roles that are allowed access

    Returns:
        Dependency function that checks the user role
    """
    async def _check_roles(
        request: Request,
        current_user: Dict = Depends(get_current_user),
    ) -> Dict:
        decision = authorize(current_user, required_roles)
        if decision != AccessDecision.ALLOW:
            await log_access_attempt(current_user, request.url.path, success=False)
            role = _principal_role(current_user)
            raise AuthorizationError(
                get_message(
                    "access",
                    "role_required",
                    roles=", ".join(r.value for r in required_roles),
                    role=role.value if role else "none",
                )
            )

        return current_user

    return _check_roles


# ===== ROLE-BASED DEPENDENCIES =====

supervisor_required = require_roles([UserRole.SUPERVISOR])
any_authorized_user = require_roles([UserRole.SUPERVISOR, UserRole.TEACHER])


# ===== SECURITY UTILITIES =====

async def log_access_attempt(user: Dict, resource: str, action: str = "access", success: bool = True):
    """
    Log access attempts for security monitoring.
    """
    role = _principal_role(user)
    log_data = {
        "user_id": user.get("id"),
        "email": user.get("email"),
        "role": role.value if role else None,
        "resource": resource,
        "action": action,
        "success": success
    }

    if success:
        logger.info(f"Access granted: {log_data}")
    else:
        logger.warning(f"Access denied: {log_data}")
