"""Email notifications using the Resend API."""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from datetime import datetime
from typing import Protocol
from uuid import UUID

import resend

from src.rbac.core.config import Settings, get_settings
from src.rbac.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")


class NotificationDispatcher(Protocol):
    """Outbound notification channel.

    Delivery is best-effort: implementations report failure through the
    return value and never raise.
    """

    def send(self, recipient: str, subject: str, body: str) -> bool: ...


class EmailDispatcher:
    """Deliver plain-text notifications by email through Resend."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def send(self, recipient: str, subject: str, body: str) -> bool:
        """Send a plain-text email.

        Returns:
            True if the email was sent (or logged in dev mode), False on error
        """
        settings = self.settings

        if not settings.resend_api_key:
            # Dev mode: log instead of sending
            logger.warning("RESEND_API_KEY not set - email not sent", subject=subject)
            return True

        resend.api_key = settings.resend_api_key

        def _send() -> None:
            resend.Emails.send(
                {
                    "from": settings.email_from,
                    "to": [recipient],
                    "subject": subject,
                    "text": body,
                }
            )

        try:
            future = _email_executor.submit(_send)
            future.result(timeout=settings.email_send_timeout_seconds)
            logger.info("Email sent", subject=subject)
            return True
        except FuturesTimeoutError:
            logger.error("Email send timed out", timeout=settings.email_send_timeout_seconds)
            return False
        except Exception as e:
            logger.error("Failed to send email", subject=subject, error=str(e))
            return False


def build_invitation_email(
    invitation_id: UUID,
    tenant_name: str,
    inviter_name: str,
    role: str,
    expires_at: datetime,
    settings: Settings | None = None,
) -> tuple[str, str]:
    """Compose the subject and body of an invitation email.

    The acceptance reference is the invitation id; the accept endpoint
    still requires the caller's authenticated email to match.
    """
    settings = settings or get_settings()
    accept_url = f"{settings.app_url}/accept-invitation?token={invitation_id}"
    subject = f"You've been invited to join {tenant_name}"
    body = (
        f"{inviter_name} has invited you to join {tenant_name} as {role}.\n\n"
        f"Accept the invitation: {accept_url}\n\n"
        f"This invitation expires on {expires_at:%Y-%m-%d %H:%M} UTC. "
        "If you didn't expect it, you can safely ignore this email."
    )
    return subject, body


def send_invitation_email(
    dispatcher: NotificationDispatcher,
    to: str,
    invitation_id: UUID,
    tenant_name: str,
    inviter_name: str,
    role: str,
    expires_at: datetime,
) -> bool:
    """Compose and dispatch an invitation email. Never raises."""
    subject, body = build_invitation_email(
        invitation_id, tenant_name, inviter_name, role, expires_at
    )
    try:
        return dispatcher.send(to, subject, body)
    except Exception as e:
        logger.error(
            "Invitation email dispatch failed",
            invitation_id=str(invitation_id),
            error=str(e),
        )
        return False
