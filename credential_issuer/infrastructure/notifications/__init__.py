"""Notification delivery adapters.

Usage:
    from credential_issuer.infrastructure.notifications import (
        HttpNotificationDispatcher,
        StubNotificationDispatcher,
    )
"""

from credential_issuer.infrastructure.notifications.http_dispatcher import (
    HttpNotificationDispatcher,
)
from credential_issuer.infrastructure.notifications.stub_dispatcher import (
    SentNotification,
    StubNotificationDispatcher,
)

__all__ = [
    "HttpNotificationDispatcher",
    "SentNotification",
    "StubNotificationDispatcher",
]
