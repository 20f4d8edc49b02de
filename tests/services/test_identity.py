"""Caller identity — bearer token verification."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from tasktracker.api.identity import decode_identity, get_identity
from tasktracker.config import Settings
from tasktracker.core.errors import AuthenticationError
from tasktracker.main import app

SECRET = "test-secret-with-enough-bytes-for-hs256"


def _token(secret=SECRET, **overrides):
    claims = {
        "id": str(uuid4()), "email": "jane@example.com",
        "firstName": "Jane", "lastName": "Roe",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    claims.update(overrides)
    return jwt.encode(claims, secret, algorithm="HS256"), claims


def test_decode_maps_claims():
    token, claims = _token()
    identity = decode_identity(token, SECRET)
    assert str(identity.id) == claims["id"]
    assert identity.email == "jane@example.com"
    assert identity.first_name == "Jane"
    assert identity.last_name == "Roe"


@pytest.mark.parametrize("token", [
    _token(secret="another-secret-with-enough-bytes-for-hs256")[0],
    _token(exp=datetime.now(timezone.utc) - timedelta(minutes=1))[0],
    _token(id="not-a-uuid")[0],
    _token(email="")[0],
    "garbage",
])
def test_bad_tokens_are_rejected(token):
    with pytest.raises(AuthenticationError) as exc_info:
        decode_identity(token, SECRET)
    assert exc_info.value.http_status == 401


async def test_get_identity_requires_bearer_header():
    settings = Settings(jwt_secret=SECRET)
    with pytest.raises(AuthenticationError):
        await get_identity(None, settings)
    with pytest.raises(AuthenticationError):
        await get_identity("Token abc", settings)

    token, _ = _token()
    identity = await get_identity(f"Bearer {token}", settings)
    assert identity.email == "jane@example.com"


async def test_missing_token_over_http_is_401(client):
    app.dependency_overrides.pop(get_identity)
    resp = await client.get("/api/v1/tasks")
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"
