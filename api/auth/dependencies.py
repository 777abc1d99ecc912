"""
Auth dependencies for protected FastAPI routes.

Routes depend on `get_current_user` (who is calling) or `get_store` (a
store client already scoped to that caller). Both run before any handler
logic, so a missing or bad token is a 401 with no database access.
"""

from __future__ import annotations

import re
from typing import AsyncIterator

from fastapi import Depends, Header

from core import store
from core.errors import Unauthenticated

from . import service
from .schemas import Identity

INVALID_HEADER_MESSAGE = "Invalid authorization header."

# Scheme is case-sensitive; the token itself carries no whitespace.
_BEARER_RE = re.compile(r"Bearer[ \t]+(\S+)")


def parse_bearer_header(authorization: str | None) -> str:
    match = _BEARER_RE.fullmatch((authorization or "").strip())
    if match is None:
        raise Unauthenticated(INVALID_HEADER_MESSAGE)
    return match.group(1)


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return parse_bearer_header(authorization)


async def get_current_user(access_token: str = Depends(get_bearer_token)) -> Identity:
    return await service.get_identity_from_access_token(access_token)


async def get_store(
    identity: Identity = Depends(get_current_user),
) -> AsyncIterator[store.StoreClient]:
    async with store.open_store(user_id=identity.user_id, claims=identity.claims) as client:
        yield client
