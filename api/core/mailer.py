"""
Transactional email over the Resend HTTP API.

Used endpoint:
- POST /emails  -> {"id": "..."}
"""

from __future__ import annotations

from typing import Any

import httpx


# Provider rejections are explicit and separable from transport errors.
class MailerError(RuntimeError):
    pass


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise MailerError("RESEND_API_URL is empty.")
    return base_url.rstrip("/")


async def send_email(
    *,
    base_url: str,
    api_key: str,
    sender: str,
    to: list[str],
    subject: str,
    html: str,
    reply_to: str | None = None,
    timeout_s: float = 10.0,
) -> str:
    """
    Send one HTML email and return the provider's message id.
    """
    base_url = _normalize_base_url(base_url)
    if not (api_key or "").strip():
        raise MailerError("RESEND_API_KEY is empty.")
    if not to:
        raise MailerError("Recipient list is empty.")

    payload: dict[str, Any] = {"from": sender, "to": to, "subject": subject, "html": html}
    if reply_to:
        payload["reply_to"] = reply_to

    async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s) as client:
        resp = await client.post(
            "/emails",
            json=payload,
            headers={"Authorization": f"Bearer {api_key.strip()}"},
        )

    if resp.status_code not in (200, 201, 202):
        body = resp.text[:500]
        raise MailerError(f"Resend request failed: {resp.status_code} {body}")

    data: dict[str, Any] = resp.json()
    return str(data.get("id") or "")
