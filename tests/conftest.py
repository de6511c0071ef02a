# tests/conftest.py

"""
Pytest fixtures shared by the API and unit tests.

The app is pointed at a throwaway sqlite file before it is imported; the
file is removed after every test so each test starts from empty tables.
"""

import os
import tempfile
from pathlib import Path

_DB_PATH = Path(tempfile.gettempdir()) / f"evalboard-test-{os.getpid()}.db"
os.environ["DATABASE_URI"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["LOG_TO_FILE"] = "false"
os.environ.pop("REDIS_HOST", None)

import pytest
from fastapi.testclient import TestClient

from evalboard.main import app
from evalboard.models.enums import UserRole
from evalboard.services.notification import notification_hub
from tests.helpers import (
    API,
    SUPERVISOR_EMAIL,
    SUPERVISOR_PASSWORD,
    TEACHER_PASSWORD,
    create_user,
    full_sections,
    login,
)

# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client():
    """TestClient with an empty database and an empty notification history."""
    with TestClient(app) as test_client:
        test_client.portal.call(notification_hub.clear)
        yield test_client
    if _DB_PATH.exists():
        _DB_PATH.unlink()

# =============================================================================
# PRINCIPAL FIXTURES
# =============================================================================

@pytest.fixture
def supervisor_id(client):
    return create_user(client, SUPERVISOR_EMAIL, SUPERVISOR_PASSWORD, UserRole.SUPERVISOR, "Head Supervisor")

@pytest.fixture
def supervisor_headers(client, supervisor_id):
    return login(client, SUPERVISOR_EMAIL, SUPERVISOR_PASSWORD)

@pytest.fixture
def provision_teacher(client, supervisor_headers):
    """Factory: provision a teacher through the API and return the response JSON."""

    def _provision(name: str, email: str, department: str = "Sciences", **extra) -> dict:
        payload = {
            "name": name,
            "email": email,
            "department": department,
            "subject": extra.pop("subject", "Physics"),
            "password": extra.pop("password", TEACHER_PASSWORD),
            **extra,
        }
        response = client.post(f"{API}/teachers", json=payload, headers=supervisor_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _provision

# =============================================================================
# EVALUATION PAYLOAD FIXTURES
# =============================================================================

@pytest.fixture
def submit_evaluation(client, supervisor_headers):
    """Factory: submit an evaluation for a teacher and return the response JSON."""

    def _submit(teacher_id: int, score: int = 3, overrides: dict = None, status: str = "submitted") -> dict:
        payload = {
            "teacher_id": teacher_id,
            "sections": full_sections(score, overrides),
            "final_notes": "Solid lesson",
            "status": status,
        }
        response = client.post(f"{API}/evaluations", json=payload, headers=supervisor_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _submit
