"""Credential domain errors.

Every business-rule outcome of allocation, verification and token
redemption is one of these values, returned inside ``Failure``.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from credential_issuer.domain.errors import SecretTokenError

    return Failure(error=SecretTokenError(
        code=ErrorCode.TOKEN_EXPIRED,
        message=CredentialErrorMessage.TOKEN_EXPIRED,
    ))
"""

from dataclasses import dataclass

from credential_issuer.core.errors import AuthenticationError, DomainError


class CredentialErrorMessage:
    """Human-readable messages paired with credential error codes."""

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    INVALID_SUB_PILLAR = "Sub-pillar base is not one of the 81 valid ranges"
    PILLAR_EXHAUSTED = "Sub-pillar has issued all of its codes"

    # -------------------------------------------------------------------------
    # Verification codes
    # -------------------------------------------------------------------------

    INVALID_CODE = "Invalid verification code"
    CODE_EXPIRED = "Verification code has expired"
    CODE_ALREADY_CONSUMED = "Verification code is no longer valid"
    CODE_ATTEMPTS_EXCEEDED = "Verification code has exceeded maximum retry attempts"

    # -------------------------------------------------------------------------
    # Secret tokens
    # -------------------------------------------------------------------------

    TOKEN_NOT_FOUND = "Token not found"
    TOKEN_EXPIRED = "Token has expired"
    TOKEN_ALREADY_USED = "Token has already been used"
    TOKEN_INVALID = "Invalid token"


@dataclass(frozen=True, slots=True, kw_only=True)
class AllocationError(DomainError):
    """Student code allocation failure.

    Attributes:
        sub_pillar_base: Base the caller asked to allocate from.
    """

    sub_pillar_base: int


@dataclass(frozen=True, slots=True, kw_only=True)
class VerificationCodeError(AuthenticationError):
    """Verification code rejected.

    Attributes:
        purpose: Purpose value of the code that was checked.
        retry_count: Failed attempts recorded on the active code, if any.
    """

    purpose: str
    retry_count: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SecretTokenError(AuthenticationError):
    """Secret token rejected.

    Attributes:
        purpose: Purpose value of the stored token, when it was found.
    """

    purpose: str | None = None
