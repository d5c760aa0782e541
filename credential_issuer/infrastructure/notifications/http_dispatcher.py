"""HTTP notification dispatcher.

Delivers notifications through the notification service's broadcast
endpoint. Each call is a single POST; failures are logged and returned as
``Failure(ExternalServiceError)`` and never retried here.

Request:
    POST {base_url}{endpoint}
    X-Service-Token: <shared secret>
    {
        "targetUserIds": ["<uuid>"],
        "channels": ["EMAIL"],
        "title": "...",
        "body": "...",
        "type": "STUDENT_REGISTERED"
    }

Broadcasts send an empty ``targetUserIds`` list with ``"broadcast": true``.
"""

from typing import Any
from uuid import UUID

import httpx

from credential_issuer.core.constants import (
    NOTIFICATION_CHANNEL_EMAIL,
    SERVICE_TOKEN_HEADER,
)
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.result import Failure, Result, Success
from credential_issuer.domain.notifications import (
    Broadcast,
    Notification,
    NotificationTarget,
    RenderedNotification,
    ResendVerificationCodeNotification,
    VerificationCodeNotification,
    render_notification,
    target_label,
)
from credential_issuer.domain.protocols import LoggerProtocol
from credential_issuer.infrastructure.enums import InfrastructureErrorCode
from credential_issuer.infrastructure.errors import ExternalServiceError

SERVICE_NAME = "notification_service"


def build_payload(
    rendered: RenderedNotification, target: NotificationTarget
) -> dict[str, Any]:
    """Build the JSON body expected by the notification service."""
    payload: dict[str, Any] = {
        "targetUserIds": [] if isinstance(target, Broadcast) else [str(target)],
        "channels": [NOTIFICATION_CHANNEL_EMAIL],
        "title": rendered.subject,
        "body": rendered.body,
        "type": rendered.type.value,
    }
    if isinstance(target, Broadcast):
        payload["broadcast"] = True
    return payload


class HttpNotificationDispatcher:
    """NotificationProtocol implementation backed by httpx.

    Usage:
        dispatcher = HttpNotificationDispatcher(
            base_url="http://bff:8080",
            endpoint="/api/notifications/broadcast",
            service_token=settings.notification_service_token,
            timeout=10.0,
            logger=logger,
        )
        result = await dispatcher.send_verification_code(user_id, "042917")
    """

    def __init__(
        self,
        *,
        base_url: str,
        endpoint: str,
        service_token: str | None,
        timeout: float,
        logger: LoggerProtocol,
    ) -> None:
        self._url = f"{base_url}{endpoint}"
        self._service_token = service_token
        self._timeout = timeout
        self._logger = logger

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
        """Render and POST one notification.

        Returns:
            Success(None): Service answered 2xx.
            Failure(ExternalServiceError): Timeout, connection error or
                non-2xx response.
        """
        rendered = render_notification(notification)
        headers = {"Content-Type": "application/json"}
        if self._service_token:
            headers[SERVICE_TOKEN_HEADER] = self._service_token

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._url,
                    headers=headers,
                    json=build_payload(rendered, target),
                )
        except httpx.TimeoutException as e:
            return self._failure(
                rendered,
                target,
                InfrastructureErrorCode.EXTERNAL_SERVICE_TIMEOUT,
                "Notification service request timed out",
                error=str(e),
            )
        except httpx.RequestError as e:
            return self._failure(
                rendered,
                target,
                InfrastructureErrorCode.EXTERNAL_SERVICE_UNAVAILABLE,
                f"Failed to connect to notification service: {e}",
                error=str(e),
            )

        if not response.is_success:
            return self._failure(
                rendered,
                target,
                InfrastructureErrorCode.EXTERNAL_SERVICE_ERROR,
                f"Notification service returned {response.status_code}",
                status_code=str(response.status_code),
            )

        self._logger.info(
            "notification_sent",
            notification_type=rendered.type.value,
            target=target_label(target),
        )
        return Success(value=None)

    def _failure(
        self,
        rendered: RenderedNotification,
        target: NotificationTarget,
        infrastructure_code: InfrastructureErrorCode,
        message: str,
        **details: str,
    ) -> Failure[ExternalServiceError]:
        self._logger.warning(
            "notification_failed",
            notification_type=rendered.type.value,
            target=target_label(target),
            reason=infrastructure_code.value,
            **details,
        )
        return Failure(
            error=ExternalServiceError(
                code=ErrorCode.NOTIFICATION_FAILED,
                message=message,
                infrastructure_code=infrastructure_code,
                service_name=SERVICE_NAME,
                details=details or None,
            )
        )
