"""
Caller Identity
===============

Requests reach this service through the platform gateway or from sibling
services. Both pass the acting user in ``X-DEVOPS-UID`` and a service token in
``X-DEVOPS-BK-TOKEN``. Only SHA-256 digests of accepted tokens are configured.
"""

import hashlib
import hmac
from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Header, HTTPException

from quality_range.config.settings import get_settings

AUTH_HEADER_USER_ID = "X-DEVOPS-UID"
AUTH_HEADER_TOKEN = "X-DEVOPS-BK-TOKEN"


@dataclass(frozen=True)
class Caller:
    """The user a range query is run for."""

    user_id: str
    project_id: str
    token_verified: bool


def token_digest(token: str) -> str:
    """SHA-256 hex digest of a service token, as stored in settings."""
    return hashlib.sha256(token.encode()).hexdigest()


def is_trusted_token(token: Optional[str]) -> bool:
    if not token:
        return False
    digest = token_digest(token)
    return any(
        hmac.compare_digest(digest, accepted) for accepted in get_settings().service_token_digests
    )


async def get_caller(
    project_id: str,
    user_id: Optional[str] = Header(None, alias=AUTH_HEADER_USER_ID),
    token: Optional[str] = Header(None, alias=AUTH_HEADER_TOKEN),
) -> Caller:
    """
    Identify the caller and bind it into the request's log context.

    Raises:
        HTTPException: 401 when the user header is missing or the token is not accepted
    """
    settings = get_settings()

    if not user_id or not user_id.strip():
        raise HTTPException(status_code=401, detail=f"{AUTH_HEADER_USER_ID} header is required")

    token_verified = is_trusted_token(token)
    if not token_verified and not (settings.debug and settings.skip_token_validation):
        raise HTTPException(status_code=401, detail="Invalid service token")

    caller = Caller(user_id=user_id.strip(), project_id=project_id, token_verified=token_verified)
    structlog.contextvars.bind_contextvars(user_id=caller.user_id, project_id=project_id)
    return caller
