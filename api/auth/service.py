"""
Bearer-token verification against the external auth service.

Flow:
- decode the JWT locally (no signature check) to reject junk early
- GET {AUTH_URL}/user with the token; the auth service is the authority
- build an `Identity` carrying user id, token and RLS claims
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core import config
from core.errors import Unauthenticated, UpstreamFault

from . import security
from .schemas import Identity

logger = logging.getLogger(__name__)

_REJECTED_STATUSES = {401, 403, 404}


async def fetch_auth_user(access_token: str) -> dict[str, Any]:
    base_url = config.auth_url()
    if not base_url:
        logger.error("auth_not_configured AUTH_URL is empty")
        raise UpstreamFault()

    headers = {"Authorization": f"Bearer {access_token}"}
    api_key = config.auth_api_key()
    if api_key:
        headers["apikey"] = api_key

    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=config.auth_timeout_s()) as client:
            resp = await client.get("/user", headers=headers)
    except httpx.HTTPError as exc:
        logger.error("auth_request_failed error=%s", exc.__class__.__name__)
        raise UpstreamFault() from exc

    if resp.status_code in _REJECTED_STATUSES:
        raise Unauthenticated()
    if resp.status_code != 200:
        logger.error("auth_request_failed status=%s body=%s", resp.status_code, resp.text[:300])
        raise UpstreamFault()

    try:
        data = resp.json()
    except ValueError as exc:
        raise UpstreamFault() from exc
    if not isinstance(data, dict):
        raise Unauthenticated()
    return data


async def get_identity_from_access_token(access_token: str) -> Identity:
    try:
        claims = security.decode_unverified_claims(access_token)
    except security.AuthSecurityError as exc:
        raise Unauthenticated() from exc

    user = await fetch_auth_user(access_token)
    user_id = str(user.get("id") or "").strip()
    if not user_id:
        raise Unauthenticated()
    if str(claims.get("sub") or "").strip() != user_id:
        logger.warning("auth_subject_mismatch user_id=%s", user_id)
        raise Unauthenticated()

    email = user.get("email")
    return Identity(
        user_id=user_id,
        token=access_token,
        email=str(email) if email else None,
        claims=security.rls_claims(claims, user_id=user_id),
    )
