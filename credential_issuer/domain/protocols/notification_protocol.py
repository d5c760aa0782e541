"""NotificationProtocol - outbound delivery of codes and notices.

The core hands a credential to this port after the transaction that
created it has committed. Delivery failures come back as data and never
undo the credential. Adapters return ExternalServiceError on failure.
"""

from typing import Protocol
from uuid import UUID

from credential_issuer.core.errors import DomainError
from credential_issuer.core.result import Result
from credential_issuer.domain.notifications import Notification, NotificationTarget


class NotificationProtocol(Protocol):
    """Protocol for notification delivery.

    Implementations:
        - HttpNotificationDispatcher: credential_issuer/infrastructure/notifications/http_dispatcher.py
        - StubNotificationDispatcher: credential_issuer/infrastructure/notifications/stub_dispatcher.py
    """

    async def send_verification_code(
        self, user_id: UUID, code: str
    ) -> Result[None, DomainError]:
        """Deliver the first verification code to a user."""
        ...

    async def send_resend_verification_code(
        self, user_id: UUID, code: str
    ) -> Result[None, DomainError]:
        """Deliver a replacement verification code to a user."""
        ...

    async def notify(
        self, notification: Notification, target: NotificationTarget
    ) -> Result[None, DomainError]:
        """Deliver any notification variant to one user or to everyone."""
        ...
