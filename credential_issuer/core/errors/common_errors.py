"""Common error classes shared by every credential type.

Error Types:
- ValidationError: Caller supplied an input outside the accepted domain
- ConflictError: Store contention that outlived the retry budget
- AuthenticationError: A submitted credential was rejected

Usage:
    return Failure(error=ConflictError(
        code=ErrorCode.CONFLICT,
        message="Store contention persisted after retries",
        resource_type="secret_token",
    ))
"""

from dataclasses import dataclass

from credential_issuer.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Transient store conflict that exhausted its retries.

    Attributes:
        resource_type: Kind of credential whose transaction kept conflicting.
        attempts: Number of attempts made before giving up.
    """

    resource_type: str
    attempts: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """A submitted code or token was rejected."""

    pass
