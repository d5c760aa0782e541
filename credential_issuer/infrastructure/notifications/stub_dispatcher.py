"""In-memory notification dispatcher for development and tests.

Logs every notification (type and target only, never the body, which may
carry a code) and keeps it in ``sent`` so tests can read back what would
have been delivered.
"""

from dataclasses import dataclass
from uuid import UUID

from credential_issuer.core.result import Result, Success
from credential_issuer.domain.notifications import (
    Notification,
    NotificationTarget,
    RenderedNotification,
    ResendVerificationCodeNotification,
    VerificationCodeNotification,
    render_notification,
    target_label,
)
from credential_issuer.domain.protocols import LoggerProtocol
from credential_issuer.infrastructure.errors import ExternalServiceError


@dataclass(frozen=True, kw_only=True)
class SentNotification:
    """Notification captured by the stub."""

    notification: Notification
    target: NotificationTarget
    rendered: RenderedNotification


class StubNotificationDispatcher:
    """NotificationProtocol implementation that never leaves the process."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger
        self.sent: list[SentNotification] = []

    async def send_verification_code(
        self, user_id: UUID, code: str
    ) -> Result[None, ExternalServiceError]:
        return await self.notify(VerificationCodeNotification(code=code), user_id)

    async def send_resend_verification_code(
        self, user_id: UUID, code: str
    ) -> Result[None, ExternalServiceError]:
        return await self.notify(ResendVerificationCodeNotification(code=code), user_id)

    async def notify(
        self, notification: Notification, target: NotificationTarget
    ) -> Result[None, ExternalServiceError]:
        rendered = render_notification(notification)
        self.sent.append(
            SentNotification(notification=notification, target=target, rendered=rendered)
        )
        self._logger.info(
            "notification_stubbed",
            notification_type=rendered.type.value,
            subject=rendered.subject,
            target=target_label(target),
        )
        return Success(value=None)

    def last_code_for(self, user_id: UUID) -> str | None:
        """Code carried by the most recent verification notification to a user."""
        for entry in reversed(self.sent):
            if entry.target != user_id:
                continue
            match entry.notification:
                case VerificationCodeNotification(code=code) | (
                    ResendVerificationCodeNotification(code=code)
                ):
                    return code
        return None
