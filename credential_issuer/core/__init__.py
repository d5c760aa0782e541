"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes for domain-level error handling
- Settings and internal constants

The core module has NO dependencies on other application layers.
"""

from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    ValidationError,
)
from credential_issuer.core.result import Failure, Result, Success

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
    "ValidationError",
]
