"""Cryptographically secure CredentialGeneratorProtocol implementation."""

import secrets
from uuid import UUID, uuid4

from credential_issuer.core.constants import TOKEN_BYTES


class SecureCredentialGenerator:
    """Random material from the ``secrets`` module.

    Usage:
        generator = SecureCredentialGenerator()
        generator.numeric_code(6)  # "042917"
        generator.secret()         # 43-char urlsafe string
    """

    def numeric_code(self, length: int) -> str:
        # One randbelow per digit keeps leading zeros and a uniform distribution
        return "".join(str(secrets.randbelow(10)) for _ in range(length))

    def secret(self) -> str:
        return secrets.token_urlsafe(TOKEN_BYTES)

    def lookup_id(self) -> UUID:
        return uuid4()

    def choice[T](self, options: list[T]) -> T:
        return secrets.choice(options)
