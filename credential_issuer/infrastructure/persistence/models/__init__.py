"""Database models package.

Importing this package registers every table on ``Base.metadata``.
"""

from credential_issuer.infrastructure.persistence.models.secret_token import (
    SecretToken,
)
from credential_issuer.infrastructure.persistence.models.sub_pillar_counter import (
    SubPillarCounter,
)
from credential_issuer.infrastructure.persistence.models.verification_code import (
    VerificationCode,
)

__all__ = [
    "SecretToken",
    "SubPillarCounter",
    "VerificationCode",
]
