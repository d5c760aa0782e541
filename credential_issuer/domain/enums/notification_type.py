"""Notification types understood by the notification service.

Values match exactly what the downstream notification service expects in
the ``type`` field.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Notification types accepted by the notification service."""

    STUDENT_REGISTERED = "STUDENT_REGISTERED"
    """New student registered (verification code sent or resent)."""

    STUDENT_VERIFIED = "STUDENT_VERIFIED"
    """Student account verified successfully."""

    PAYMENT_STATUS_CHANGED = "PAYMENT_STATUS_CHANGED"
    """Payment submission approved or rejected."""

    ISSUE_STATUS_CHANGED = "ISSUE_STATUS_CHANGED"
    """Support issue moved between open, in-progress and solved."""

    ISSUE_MESSAGE_NEW = "ISSUE_MESSAGE_NEW"
    """New message posted in an issue conversation."""

    ADMIN_BROADCAST = "ADMIN_BROADCAST"
    """Admin broadcast message to students."""
