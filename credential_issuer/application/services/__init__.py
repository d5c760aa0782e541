"""Application services.

Usage:
    from credential_issuer.application.services import VerificationCodeManager
"""

from credential_issuer.application.services.code_allocator import (
    CodeAllocator,
    StudentCodeGenerator,
)
from credential_issuer.application.services.secret_token_manager import (
    IssuedSecretToken,
    SecretTokenManager,
    SecretTokenRedemption,
)
from credential_issuer.application.services.transaction_retry import (
    run_in_transaction,
)
from credential_issuer.application.services.verification_code_manager import (
    VerificationCodeManager,
)

__all__ = [
    "CodeAllocator",
    "StudentCodeGenerator",
    "VerificationCodeManager",
    "SecretTokenManager",
    "IssuedSecretToken",
    "SecretTokenRedemption",
    "run_in_transaction",
]
