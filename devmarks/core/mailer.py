"""
Outbound mail API client.

Used endpoint:
- POST {MAIL_API_URL}  {"from": ..., "to": ..., "subject": ..., "text": ...}
  authenticated with `Authorization: Bearer {MAIL_API_KEY}` when a key is set.
"""

from __future__ import annotations

import logging

import httpx

from .config import Settings

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Welcome to devmarks"


# Mail failures are explicit and separable from other runtime errors.
class MailerError(RuntimeError):
    pass


def welcome_text(username: str) -> str:
    return (
        f"Hi {username},\n\n"
        "Thanks for signing up. You can now bookmark the projects you care about.\n"
    )


async def send_welcome_email(
    username: str,
    email: str,
    *,
    settings: Settings,
    timeout_s: float = 10.0,
) -> None:
    base_url = (settings.mail_api_url or "").strip()
    if not base_url:
        raise MailerError("MAIL_API_URL is empty.")
    recipient = (email or "").strip()
    if not recipient:
        raise MailerError("Recipient address is empty.")

    headers = {}
    if settings.mail_api_key:
        headers["Authorization"] = f"Bearer {settings.mail_api_key}"

    async with httpx.AsyncClient(timeout=timeout_s) as client:
        resp = await client.post(
            base_url,
            headers=headers,
            json={
                "from": settings.mail_from,
                "to": recipient,
                "subject": WELCOME_SUBJECT,
                "text": welcome_text(username),
            },
        )

    if resp.status_code >= 300:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:300]
        raise MailerError(f"Mail API request failed: {resp.status_code} {body}")


async def send_welcome_email_background(username: str, email: str, *, settings: Settings) -> None:
    """
    BackgroundTasks entrypoint.

    This should never raise to the request path; we just log failures.
    """
    try:
        await send_welcome_email(username, email, settings=settings)
        logger.info("welcome_email_sent username=%s", username)
    except Exception:
        logger.exception("welcome_email_failed username=%s", username)
