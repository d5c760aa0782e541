"""bcrypt implementation of SecretHasherProtocol.

Hashes the secret half of external tokens before storage.

Token Strategy:
    - Secret is 32 random bytes, urlsafe base64 (43 characters)
    - Hashed with bcrypt (cost factor from settings, 12 by default)
    - bcrypt.checkpw compares in constant time
"""

import bcrypt


class BcryptSecretHasher:
    """Hash and verify token secrets with bcrypt.

    Usage:
        hasher = BcryptSecretHasher(rounds=12)
        secret_hash = hasher.hash_secret(secret)
        hasher.verify_secret(secret, secret_hash)  # True
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize hasher.

        Args:
            rounds: bcrypt cost factor (4-31). Tests use 4 to stay fast.
        """
        self._rounds = rounds

    def hash_secret(self, secret: str) -> str:
        """Return the bcrypt hash of ``secret`` as text."""
        secret_hash = bcrypt.hashpw(
            secret.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)
        )
        return secret_hash.decode("utf-8")

    def verify_secret(self, secret: str, secret_hash: str) -> bool:
        """Verify a secret against a stored hash.

        Returns:
            True if the secret matches, False otherwise (including a
            malformed stored hash).
        """
        try:
            return bcrypt.checkpw(secret.encode("utf-8"), secret_hash.encode("utf-8"))
        except ValueError:
            # Invalid hash format
            return False
