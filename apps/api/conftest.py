"""
Pytest configuration for Django app tests.
"""

from collections.abc import Callable

from django.core.cache import cache
from django.test import Client as DjangoClient

import pytest

from apps.api.core.auth import issue_token
from apps.api.core.models import User
from apps.api.core.tests.factories import UserFactory


@pytest.fixture(autouse=True)
def clear_cache():
    """Idempotency keys live in the cache; start every test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client() -> DjangoClient:
    """Django test client for API requests."""
    return DjangoClient()


@pytest.fixture
def customer(db) -> User:
    return UserFactory(name="Casey Customer", email="casey@example.com")


@pytest.fixture
def other_customer(db) -> User:
    return UserFactory(name="Olive Other", email="olive@example.com")


@pytest.fixture
def employee(db) -> User:
    return UserFactory(name="Evan Employee", role=User.Role.EMPLOYEE)


@pytest.fixture
def admin_user(db) -> User:
    return UserFactory(name="Ada Admin", role=User.Role.ADMIN)


@pytest.fixture
def auth_header() -> Callable[[User], dict[str, str]]:
    """Build request kwargs carrying a bearer token for a user."""

    def _header(user: User) -> dict[str, str]:
        return {"HTTP_AUTHORIZATION": f"Bearer {issue_token(user)}"}

    return _header
