"""Notification utilities - email."""

from src.rbac.core.notifications.email import (
    EmailDispatcher,
    NotificationDispatcher,
    build_invitation_email,
    send_invitation_email,
)

__all__ = [
    "EmailDispatcher",
    "NotificationDispatcher",
    "build_invitation_email",
    "send_invitation_email",
]
