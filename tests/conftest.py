from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest
from django.conf import settings
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def make_token():
    """Factory for bearer tokens signed with the configured test key."""

    def _make(key=None, **claims):
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": "user-123",
            "email": "tester@example.com",
            "iat": now,
            "exp": now + timedelta(minutes=5),
        }
        payload.update(claims)
        return pyjwt.encode(
            payload,
            key or settings.CATALOG_AUTH["SIGNING_KEY"],
            algorithm="HS256",
        )

    return _make


@pytest.fixture()
def auth_client(make_token):
    """APIClient sending a valid bearer token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token()}")
    return client


@pytest.fixture()
def product_payload():
    return {
        "name": "Paint",
        "category": "wall",
        "description": "d",
        "image": "i",
        "fullDescription": "fd",
    }
