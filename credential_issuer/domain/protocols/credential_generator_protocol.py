"""CredentialGeneratorProtocol - source of random credential material."""

from typing import Protocol
from uuid import UUID


class CredentialGeneratorProtocol(Protocol):
    """Protocol for generating random codes, secrets and lookup ids.

    Implementations:
        - SecureCredentialGenerator: credential_issuer/infrastructure/security/credential_generator.py
    """

    def numeric_code(self, length: int) -> str:
        """Return a uniformly random string of ``length`` decimal digits."""
        ...

    def secret(self) -> str:
        """Return a url-safe high-entropy secret."""
        ...

    def lookup_id(self) -> UUID:
        """Return a random, non-secret lookup identifier."""
        ...

    def choice[T](self, options: list[T]) -> T:
        """Return one element chosen uniformly at random."""
        ...
