"""API router configuration."""

from fastapi import APIRouter

from evalboard.api.endpoints import (
    auth,
    dashboard,
    evaluations,
    notifications,
    settings,
    teachers,
    users,
)

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Unauthorized"},
        409: {"description": "Email already registered"},
        422: {"description": "Validation Error"},
    },
)

api_router.include_router(
    teachers.router,
    prefix="/teachers",
    tags=["Teachers"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Teacher not found"},
        409: {"description": "Email already registered"},
        422: {"description": "Validation Error"},
    },
)

api_router.include_router(
    evaluations.router,
    prefix="/evaluations",
    tags=["Evaluations"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Resource not found"},
        422: {"description": "Validation Error"},
    },
)

# Dashboard and reports live at the API root
api_router.include_router(
    dashboard.router,
    tags=["Reports"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        422: {"description": "Validation Error"},
    },
)

api_router.include_router(
    settings.router,
    prefix="/settings",
    tags=["Settings"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        422: {"description": "Validation Error"},
    },
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["User Management"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "User not found"},
        422: {"description": "Validation Error"},
    },
)

api_router.include_router(
    notifications.router,
    prefix="/notifications",
    tags=["Notifications"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
    },
)


def get_api_router():
    """Get configured API router with all endpoints."""
    return api_router
