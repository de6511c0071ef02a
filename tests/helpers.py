# tests/helpers.py

"""Plain helpers shared by the API tests."""

from evalboard.auth.jwt import get_password_hash
from evalboard.core.database import async_session_maker
from evalboard.models.enums import UserRole
from evalboard.repositories.user import UserRepository
from evalboard.utils.categories import DEFAULT_CATEGORIES

API = "/api/v1"
SUPERVISOR_EMAIL = "boss@school.example"
SUPERVISOR_PASSWORD = "supervisor-pass"
TEACHER_PASSWORD = "teacher-pass"


def create_user(client, email: str, password: str, role: UserRole, name: str = None) -> int:
    """Insert a user directly, bypassing the API."""

    async def _create():
        async with async_session_maker() as session:
            user = await UserRepository(session).create(email, get_password_hash(password), role, name)
            return user.id

    return client.portal.call(_create)


def login(client, email: str, password: str) -> dict:
    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    # Rely on the explicit header, not the cookie jar
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def full_sections(score: int = 3, overrides: dict = None) -> dict:
    """Every default category at `score`, with per-key overrides."""
    overrides = overrides or {}
    sections = {"classroom": {}, "student": {}, "professional": {}}
    for category in DEFAULT_CATEGORIES:
        sections[category.section][category.key] = {
            "score": overrides.get(category.key, score),
            "notes": "",
        }
    return sections
