"""Auth module init."""

from .jwt import verify_password, get_password_hash, create_access_token, create_refresh_token, verify_token
from .permissions import (
    AccessDecision,
    PageAccess,
    PageAccessState,
    authorize,
    resolve_page_access,
    get_current_user,
    get_optional_user,
    require_roles,
    # Role dependencies
    supervisor_required,
    any_authorized_user,
)
from .scope import DataScope, scope_for

__all__ = [
    # JWT functions
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "create_refresh_token",
    "verify_token",
    # Access gate
    "AccessDecision",
    "PageAccess",
    "PageAccessState",
    "authorize",
    "resolve_page_access",
    # Auth dependencies
    "get_current_user",
    "get_optional_user",
    "require_roles",
    # Role dependencies
    "supervisor_required",
    "any_authorized_user",
    # Query scope
    "DataScope",
    "scope_for",
]
