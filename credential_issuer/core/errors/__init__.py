"""Core errors package.

Usage:
    from credential_issuer.core.errors import DomainError, ConflictError
"""

from credential_issuer.core.errors.common_errors import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)
from credential_issuer.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
]
