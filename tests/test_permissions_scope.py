# tests/test_permissions_scope.py

"""
Access Gate Tests - role decisions, page redirects, query scope and tokens.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import JWTError

from evalboard.auth.jwt import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from evalboard.auth.permissions import (
    AccessDecision,
    PageAccessState,
    authorize,
    resolve_page_access,
)
from evalboard.auth.scope import UNRESTRICTED, DataScope, scope_for
from evalboard.core.config import settings
from evalboard.models.base import utc_now
from evalboard.models.enums import UserRole
from evalboard.models.evaluation import Evaluation

SUPERVISOR = {"id": 1, "email": "s@x.test", "role": UserRole.SUPERVISOR}
TEACHER = {"id": 7, "email": "t@x.test", "role": UserRole.TEACHER}


class TestAuthorize:

    def test_no_principal_is_unauthenticated(self):
        assert authorize(None, [UserRole.SUPERVISOR]) == AccessDecision.UNAUTHENTICATED

    def test_matching_role_allowed(self):
        assert authorize(SUPERVISOR, [UserRole.SUPERVISOR]) == AccessDecision.ALLOW
        assert authorize(TEACHER, [UserRole.SUPERVISOR, UserRole.TEACHER]) == AccessDecision.ALLOW

    def test_other_role_denied(self):
        assert authorize(TEACHER, [UserRole.SUPERVISOR]) == AccessDecision.DENY

    @pytest.mark.parametrize("role", [None, "", "admin", 42])
    def test_missing_or_unknown_role_never_allowed(self, role):
        principal = {"id": 3, "role": role}
        assert authorize(principal, list(UserRole)) == AccessDecision.DENY

    def test_role_given_as_string(self):
        assert authorize({"id": 1, "role": "supervisor"}, [UserRole.SUPERVISOR]) == AccessDecision.ALLOW


class TestPageAccess:

    def test_loading_decides_nothing(self):
        access = resolve_page_access(None, [UserRole.SUPERVISOR], loading=True)
        assert access.state == PageAccessState.CHECKING_AUTH
        assert access.redirect_to is None

    def test_unauthenticated_goes_to_login(self):
        access = resolve_page_access(None, [UserRole.SUPERVISOR])
        assert access.state == PageAccessState.UNAUTHENTICATED
        assert access.redirect_to == settings.LOGIN_PATH

    def test_denied_goes_to_landing(self):
        access = resolve_page_access(TEACHER, [UserRole.SUPERVISOR])
        assert access.state == PageAccessState.DENIED
        assert access.redirect_to == settings.DEFAULT_LANDING_PATH

    def test_allowed(self):
        access = resolve_page_access(SUPERVISOR, [UserRole.SUPERVISOR])
        assert access.state == PageAccessState.ALLOWED
        assert access.redirect_to is None


class TestScope:

    def test_supervisor_unrestricted(self):
        scope = scope_for(SUPERVISOR)
        assert scope is UNRESTRICTED
        assert not scope.is_restricted
        assert scope.allows_teacher(99)

    def test_teacher_narrowed_to_self(self):
        scope = scope_for(TEACHER)
        assert scope == DataScope(teacher_id=7)
        assert scope.allows_teacher(7)
        assert not scope.allows_teacher(8)

    def test_unknown_role_is_narrowed(self):
        assert scope_for({"id": 5, "role": None}).teacher_id == 5


class TestTokens:

    def test_access_token_round_trip(self):
        token = create_access_token({"sub": "12"})
        payload = verify_token(token)
        assert payload["sub"] == "12"
        assert payload["type"] == "access"

    def test_refresh_token_rejected_as_access(self):
        token = create_refresh_token({"sub": "12"})
        with pytest.raises(JWTError):
            verify_token(token)
        assert verify_token(token, expected_type=REFRESH_TOKEN_TYPE)["sub"] == "12"

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "12"}, expires_delta=timedelta(seconds=-5))
        with pytest.raises(JWTError):
            verify_token(token)

    def test_password_hash(self):
        hashed = get_password_hash("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_expiry_counted_from_utc(self):
        token = create_access_token({"sub": "12"})
        expected = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        assert abs(verify_token(token)["exp"] - expected.timestamp()) < 5


class TestTimestamps:

    def test_new_rows_carry_aware_utc(self):
        evaluation = Evaluation(teacher_id=1, sections={})
        assert evaluation.created_at.tzinfo is not None
        assert evaluation.created_at.utcoffset() == timedelta(0)

    def test_touch_sets_aware_update_time(self):
        evaluation = Evaluation(teacher_id=1, sections={})
        assert evaluation.updated_at is None
        evaluation.touch()
        assert evaluation.updated_at.tzinfo is not None
        assert evaluation.updated_at >= evaluation.created_at

    def test_utc_now(self):
        assert abs((utc_now() - datetime.now(timezone.utc)).total_seconds()) < 5
