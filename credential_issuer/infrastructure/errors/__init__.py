"""Infrastructure errors package.

Usage:
    from credential_issuer.infrastructure.errors import ExternalServiceError
"""

from credential_issuer.infrastructure.errors.infrastructure_error import (
    ExternalServiceError,
    InfrastructureError,
)

__all__ = [
    "InfrastructureError",
    "ExternalServiceError",
]
