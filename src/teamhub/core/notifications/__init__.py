"""Notification utilities - email."""

from src.teamhub.core.notifications.email import send_temporary_password_email

__all__ = [
    "send_temporary_password_email",
]
