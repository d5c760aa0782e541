"""Security adapters (hashing, random credential material).

Usage:
    from credential_issuer.infrastructure.security import BcryptSecretHasher
"""

from credential_issuer.infrastructure.security.bcrypt_secret_hasher import (
    BcryptSecretHasher,
)
from credential_issuer.infrastructure.security.credential_generator import (
    SecureCredentialGenerator,
)

__all__ = [
    "BcryptSecretHasher",
    "SecureCredentialGenerator",
]
