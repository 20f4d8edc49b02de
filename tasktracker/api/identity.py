"""Caller Identity — decodes the bearer token issued by the auth service.

Invariants:
    - Only verification happens here; signing and credential checks belong to the auth service
    - A missing, expired or malformed token raises AuthenticationError (401)
    - The resulting Identity is trusted by every manager without further checks

Design Decisions:
    - PyJWT with a shared HS256 secret, matching the token the auth service signs
      ({id, email, firstName, lastName})
"""

import logging

import jwt
from fastapi import Depends, Header

from tasktracker.config import Settings, get_settings
from tasktracker.core.domain_types import Identity, UserId, parse_identifier
from tasktracker.core.errors import AuthenticationError, BadRequestError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def decode_identity(token: str, secret: str, algorithm: str = "HS256") -> Identity:
    """Verify `token` and map its claims onto an Identity."""
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise AuthenticationError("Invalid token")

    try:
        user_id = parse_identifier(claims.get("id"), "user ID")
    except BadRequestError:
        raise AuthenticationError("Token carries no valid user id")
    email = claims.get("email")
    if not email:
        raise AuthenticationError("Token carries no email")

    return Identity(
        id=UserId(user_id),
        email=email,
        first_name=claims.get("firstName", ""),
        last_name=claims.get("lastName", ""),
    )


async def get_identity(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """FastAPI dependency for the authenticated caller."""
    if not authorization:
        raise AuthenticationError("No token provided")
    if not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("Expected a Bearer token")
    token = authorization[len(BEARER_PREFIX):].strip()
    return decode_identity(token, settings.jwt_secret, settings.jwt_algorithm)
