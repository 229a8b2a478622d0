"""Outbound email through the Resend HTTP API."""

import logging

import httpx
from pydantic import BaseModel

from app.config import FEEDBACK_FROM_EMAIL, FEEDBACK_TO_EMAIL, RESEND_API_KEY

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"
RESEND_TIMEOUT = 15.0


class MailerNotConfigured(RuntimeError):
    """Raised when the mail credentials or addresses are missing."""


class MailMessage(BaseModel):
    subject: str
    text: str
    html: str
    to: list[str]
    reply_to: str | None = None


def is_configured() -> bool:
    return bool(RESEND_API_KEY and FEEDBACK_FROM_EMAIL and FEEDBACK_TO_EMAIL)


def default_recipients() -> list[str]:
    return [addr.strip() for addr in FEEDBACK_TO_EMAIL.split(",") if addr.strip()]


async def send_email(message: MailMessage) -> str:
    """Send one message and return the provider's message id.

    Raises:
        MailerNotConfigured: credentials or addresses are not set.
        httpx.HTTPError: the provider could not be reached or rejected the message.
    """
    if not is_configured():
        raise MailerNotConfigured(
            "Set RESEND_API_KEY, FEEDBACK_FROM_EMAIL and FEEDBACK_TO_EMAIL to send email"
        )

    payload = {
        "from": FEEDBACK_FROM_EMAIL,
        "to": message.to,
        "subject": message.subject,
        "text": message.text,
        "html": message.html,
    }
    if message.reply_to:
        payload["reply_to"] = message.reply_to

    async with httpx.AsyncClient(timeout=RESEND_TIMEOUT) as client:
        resp = await client.post(
            RESEND_URL,
            headers={
                "Authorization": f"Bearer {RESEND_API_KEY}",
                "Content-Type": "application/json",
            },
            json=payload,
        )
        resp.raise_for_status()

    try:
        body = resp.json()
    except ValueError:
        body = None
    message_id = body.get("id", "") if isinstance(body, dict) else ""
    logger.info("Email sent to %s (id=%s)", ", ".join(message.to), message_id)
    return message_id
