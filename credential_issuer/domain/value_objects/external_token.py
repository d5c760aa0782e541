"""External token value object.

A secret token leaves the service as one opaque string:

    "{lookup_id}.{secret}"

``lookup_id`` is a random UUID that locates the stored row without revealing
anything; ``secret`` is the url-safe random value whose bcrypt hash is the
only thing persisted.
"""

from dataclasses import dataclass
from uuid import UUID

from credential_issuer.core.constants import (
    EXTERNAL_TOKEN_SEPARATOR,
    TOKEN_LOG_PREFIX_LENGTH,
)


@dataclass(frozen=True)
class ExternalToken:
    """Decoded form of a link-embeddable secret token.

    Attributes:
        lookup_id: Non-secret identifier of the stored token row.
        secret: Raw secret (never persisted).

    Example:
        >>> token = ExternalToken(lookup_id=UUID(int=1), secret="abc")
        >>> ExternalToken.decode(token.encode()) == token
        True
    """

    lookup_id: UUID
    secret: str

    def encode(self) -> str:
        """Render the token as a single opaque string."""
        return f"{self.lookup_id}{EXTERNAL_TOKEN_SEPARATOR}{self.secret}"

    @classmethod
    def decode(cls, value: str) -> "ExternalToken":
        """Parse an external token string.

        Args:
            value: String previously produced by ``encode``.

        Returns:
            ExternalToken: The decoded lookup id and secret.

        Raises:
            ValueError: If the string is not ``"<uuid>.<secret>"``.
        """
        if not value or EXTERNAL_TOKEN_SEPARATOR not in value:
            raise ValueError("Malformed token")
        raw_lookup_id, secret = value.split(EXTERNAL_TOKEN_SEPARATOR, 1)
        if not secret:
            raise ValueError("Malformed token")
        try:
            lookup_id = UUID(raw_lookup_id)
        except ValueError as e:
            raise ValueError("Malformed token") from e
        return cls(lookup_id=lookup_id, secret=secret)

    @staticmethod
    def redact(value: str) -> str:
        """Truncate a raw token string so it is safe to log."""
        if len(value) <= TOKEN_LOG_PREFIX_LENGTH:
            return value
        return value[:TOKEN_LOG_PREFIX_LENGTH] + "..."

    def __repr__(self) -> str:
        return f"ExternalToken(lookup_id={self.lookup_id}, secret='***')"
