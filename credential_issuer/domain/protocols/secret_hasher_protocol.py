"""SecretHasherProtocol - one-way hashing of token secrets.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (BcryptSecretHasher)
"""

from typing import Protocol


class SecretHasherProtocol(Protocol):
    """Protocol for hashing and verifying token secrets.

    Implementations:
        - BcryptSecretHasher: credential_issuer/infrastructure/security/bcrypt_secret_hasher.py
    """

    def hash_secret(self, secret: str) -> str:
        """Hash a raw secret for storage.

        Args:
            secret: Raw secret as generated.

        Returns:
            One-way hash safe to persist.
        """
        ...

    def verify_secret(self, secret: str, secret_hash: str) -> bool:
        """Check a raw secret against a stored hash.

        Must run in time independent of where a mismatch occurs.

        Returns:
            True if the secret matches, False otherwise (including a
            malformed hash).
        """
        ...
