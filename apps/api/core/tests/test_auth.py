"""
Tests for bearer token issue, resolution and role checks.
"""

from datetime import timedelta

from django.test import RequestFactory

import jwt
import pytest

from apps.api.core.auth import (
    authenticate_request,
    authorize,
    get_request_token,
    issue_token,
    resolve,
)
from apps.api.core.exceptions import AuthenticationError, AuthorizationError
from apps.api.core.models import User
from apps.api.core.tests.factories import UserFactory


@pytest.mark.django_db
class TestResolve:
    """Tests for resolving tokens to users."""

    def test_round_trip(self):
        """A freshly issued token resolves to its user."""
        user = UserFactory()
        assert resolve(issue_token(user)) == user

    def test_payload_carries_identity(self, settings):
        user = UserFactory(role=User.Role.EMPLOYEE)
        payload = jwt.decode(
            issue_token(user), settings.JWT_SECRET, algorithms=["HS256"]
        )
        assert payload["id"] == user.pk
        assert payload["email"] == user.email
        assert payload["role"] == "employee"

    def test_expired_token(self):
        user = UserFactory()
        token = issue_token(user, expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthenticationError, match="Token expired"):
            resolve(token)

    def test_tampered_token(self):
        user = UserFactory()
        token = jwt.encode({"id": user.pk}, "not-the-secret-key-used-by-tavola", "HS256")

        with pytest.raises(AuthenticationError, match="Invalid token."):
            resolve(token)

    def test_deleted_user(self):
        user = UserFactory()
        token = issue_token(user)
        user.delete()

        with pytest.raises(AuthenticationError, match="User not found"):
            resolve(token)

    def test_deactivated_user(self):
        user = UserFactory(is_active=False)

        with pytest.raises(AuthenticationError, match="deactivated"):
            resolve(issue_token(user))


@pytest.mark.django_db
class TestRequestToken:
    """Tests for reading credentials off a request."""

    def test_header_preferred_over_cookie(self, settings):
        request = RequestFactory().get(
            "/api/auth/me", HTTP_AUTHORIZATION="Bearer header-token"
        )
        request.COOKIES[settings.JWT_COOKIE_NAME] = "cookie-token"
        assert get_request_token(request) == "header-token"

    def test_cookie_fallback(self, settings):
        request = RequestFactory().get("/api/auth/me")
        request.COOKIES[settings.JWT_COOKIE_NAME] = "cookie-token"
        assert get_request_token(request) == "cookie-token"

    def test_empty_bearer_header_falls_back_to_cookie(self, settings):
        request = RequestFactory().get("/api/auth/me", HTTP_AUTHORIZATION="Bearer ")
        request.COOKIES[settings.JWT_COOKIE_NAME] = "cookie-token"
        assert get_request_token(request) == "cookie-token"

    def test_empty_bearer_header_with_valid_cookie_authenticates(self, settings):
        user = UserFactory()
        request = RequestFactory().get("/api/auth/me", HTTP_AUTHORIZATION="Bearer")
        request.COOKIES[settings.JWT_COOKIE_NAME] = issue_token(user)
        assert authenticate_request(request) == user

    def test_missing_token(self):
        request = RequestFactory().get("/api/auth/me")

        with pytest.raises(AuthenticationError, match="No token provided"):
            authenticate_request(request)


class TestAuthorize:
    """Tests for role allow-lists."""

    def test_allowed_role_passes(self):
        authorize(User(role=User.Role.ADMIN), ("admin",))

    def test_disallowed_role(self):
        with pytest.raises(AuthorizationError) as exc_info:
            authorize(User(role=User.Role.CUSTOMER), ("employee", "admin"))

        assert exc_info.value.status_code == 403
        assert "customer role is not authorized" in exc_info.value.message
