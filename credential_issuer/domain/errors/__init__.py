"""Domain errors package.

Usage:
    from credential_issuer.domain.errors import VerificationCodeError
"""

from credential_issuer.domain.errors.credential_error import (
    AllocationError,
    CredentialErrorMessage,
    SecretTokenError,
    VerificationCodeError,
)

__all__ = [
    "AllocationError",
    "CredentialErrorMessage",
    "SecretTokenError",
    "VerificationCodeError",
]
