"""
Auth request context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Identity:
    """
    A verified caller: the auth service's user id plus the bearer token it
    was verified from. `claims` are the token's JWT claims, forwarded to the
    database for row-level security.
    """

    user_id: str
    token: str
    email: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)
