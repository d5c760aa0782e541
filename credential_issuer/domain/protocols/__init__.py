"""Domain protocols (ports).

Usage:
    from credential_issuer.domain.protocols import CredentialStoreProtocol
"""

from credential_issuer.domain.protocols.credential_generator_protocol import (
    CredentialGeneratorProtocol,
)
from credential_issuer.domain.protocols.credential_store_protocol import (
    CredentialStoreProtocol,
    CredentialUnitOfWork,
    StoreConflict,
)
from credential_issuer.domain.protocols.logger_protocol import LoggerProtocol
from credential_issuer.domain.protocols.notification_protocol import (
    NotificationProtocol,
)
from credential_issuer.domain.protocols.secret_hasher_protocol import (
    SecretHasherProtocol,
)
from credential_issuer.domain.protocols.secret_token_repository import (
    SecretTokenData,
    SecretTokenRepository,
)
from credential_issuer.domain.protocols.sub_pillar_counter_repository import (
    SubPillarCounterRepository,
)
from credential_issuer.domain.protocols.verification_code_repository import (
    VerificationCodeData,
    VerificationCodeRepository,
)

__all__ = [
    # Persistence
    "CredentialStoreProtocol",
    "CredentialUnitOfWork",
    "StoreConflict",
    "SubPillarCounterRepository",
    "VerificationCodeRepository",
    "VerificationCodeData",
    "SecretTokenRepository",
    "SecretTokenData",
    # Security
    "SecretHasherProtocol",
    "CredentialGeneratorProtocol",
    # Delivery / observability
    "NotificationProtocol",
    "LoggerProtocol",
]
