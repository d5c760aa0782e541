"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems (the notification
service). Database contention is raised as StoreConflict and surfaces as
ConflictError.

Architecture:
- Infrastructure catches exceptions and maps them to DomainError subclasses
- Infrastructure errors inherit from DomainError (not Exception)
- InfrastructureErrorCode is kept for internal tracking and logging
- Used with Result types for error propagation
"""

from dataclasses import dataclass
from typing import Any

from credential_issuer.core.errors import DomainError
from credential_issuer.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        code: Domain ErrorCode (maps from InfrastructureErrorCode).
        message: Human-readable message.
        infrastructure_code: Original infrastructure error code.
        details: Additional context.
    """

    infrastructure_code: InfrastructureErrorCode | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalServiceError(InfrastructureError):
    """Notification service (or other outbound HTTP service) failure.

    Attributes:
        service_name: Name of the external service.
    """

    service_name: str
