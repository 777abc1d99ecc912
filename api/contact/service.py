"""
Contact form delivery.
"""

from __future__ import annotations

import logging
from html import escape

import httpx

from core import config, mailer
from core.errors import UpstreamFault

from . import schemas

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."
PROVIDER_FAILURE_MESSAGE = "Failed to send email"
GENERIC_FAILURE_MESSAGE = "Failed to send message. Please try again later."


def render_contact_email(payload: schemas.ContactRequest) -> str:
    name = escape(payload.name)
    email = escape(str(payload.email))
    subject = escape(payload.subject)
    message = escape(payload.message)
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #333;">New Contact Form Submission</h2>
  <div style="background: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <p style="margin: 10px 0;"><strong>From:</strong> {name}</p>
    <p style="margin: 10px 0;"><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>
    <p style="margin: 10px 0;"><strong>Subject:</strong> {subject}</p>
  </div>
  <div style="background: white; padding: 20px; border: 1px solid #ddd; border-radius: 8px;">
    <h3 style="color: #666; margin-top: 0;">Message:</h3>
    <p style="white-space: pre-wrap; color: #333; line-height: 1.6;">{message}</p>
  </div>
  <div style="margin-top: 20px; padding-top: 20px; border-top: 1px solid #ddd; color: #999; font-size: 12px;">
    <p>This email was sent from the Turbodoc contact form.</p>
  </div>
</div>
""".strip()


async def send_contact_message(payload: schemas.ContactRequest) -> dict:
    recipient = config.contact_email()
    if not recipient:
        logger.error("contact_not_configured CONTACT_EMAIL is empty")
        raise UpstreamFault(GENERIC_FAILURE_MESSAGE)

    try:
        message_id = await mailer.send_email(
            base_url=config.resend_api_url(),
            api_key=config.resend_api_key(),
            sender=config.contact_from(),
            to=[recipient],
            subject=f"[Turbodoc Contact Form] {payload.subject}",
            html=render_contact_email(payload),
            reply_to=str(payload.email),
        )
    except mailer.MailerError as exc:
        logger.error("contact_send_rejected error=%s", exc)
        raise UpstreamFault(PROVIDER_FAILURE_MESSAGE) from exc
    except httpx.HTTPError as exc:
        logger.error("contact_send_failed error=%s", exc.__class__.__name__)
        raise UpstreamFault(GENERIC_FAILURE_MESSAGE) from exc

    logger.info("contact_sent message_id=%s", message_id)
    return {"success": True, "message": SUCCESS_MESSAGE}
