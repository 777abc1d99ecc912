"""
Access-token inspection helpers.

Signature verification belongs to the auth service (see `service.py`); here
the token is only decoded locally so obviously broken or expired tokens are
rejected without a network round-trip, and so its claims can be handed to
the database.
"""

from __future__ import annotations

import time
from typing import Any

import jwt

DEFAULT_DB_ROLE = "authenticated"


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def decode_unverified_claims(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, options={"verify_signature": False})
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    exp = payload.get("exp")
    if isinstance(exp, (int, float)) and exp <= now_epoch_s():
        raise AuthSecurityError("Access token is expired.")

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise AuthSecurityError("Access token has no subject.")
    return payload


def rls_claims(claims: dict[str, Any], *, user_id: str) -> dict[str, Any]:
    """
    Claims as the database policies expect them: `sub` is the verified user
    id and `role` defaults to the authenticated role.
    """
    out = dict(claims)
    out["sub"] = user_id
    out.setdefault("role", DEFAULT_DB_ROLE)
    return out
