"""SQLAlchemy repository implementations.

Usage:
    from credential_issuer.infrastructure.persistence.repositories import (
        SecretTokenRepository,
    )
"""

from credential_issuer.infrastructure.persistence.repositories.secret_token_repository import (
    SecretTokenRepository,
)
from credential_issuer.infrastructure.persistence.repositories.sub_pillar_counter_repository import (
    SubPillarCounterRepository,
)
from credential_issuer.infrastructure.persistence.repositories.verification_code_repository import (
    VerificationCodeRepository,
)

__all__ = [
    "SecretTokenRepository",
    "SubPillarCounterRepository",
    "VerificationCodeRepository",
]
