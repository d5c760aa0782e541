"""SecretTokenRepository protocol (port) for domain layer.

Secret tokens are stored as (lookup_id, secret_hash). The raw secret only
ever exists in the external token handed to the user.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from credential_issuer.domain.enums import SecretTokenPurpose


@dataclass
class SecretTokenData:
    """Data transfer object for a secret token row."""

    id: UUID
    user_id: UUID
    lookup_id: UUID
    secret_hash: str
    purpose: SecretTokenPurpose
    expires_at: datetime
    used: bool
    used_at: datetime | None
    created_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class SecretTokenRepository(Protocol):
    """Protocol for secret token persistence operations.

    Token Lifecycle:
        1. Created on issue; the holder's previous unused token of the same
           purpose is superseded (used = true) in the same transaction
        2. Looked up by lookup_id during validation
        3. Marked used exactly once on successful validation
        4. Never reused

    Implementations:
        - SecretTokenRepository (SQLAlchemy): credential_issuer/infrastructure/persistence/repositories/
    """

    async def save(
        self,
        user_id: UUID,
        purpose: SecretTokenPurpose,
        lookup_id: UUID,
        secret_hash: str,
        expires_at: datetime,
        payload: dict[str, Any] | None = None,
    ) -> SecretTokenData:
        """Insert a new unused token."""
        ...

    async def find_by_lookup_id(
        self,
        lookup_id: UUID,
        *,
        for_update: bool = False,
    ) -> SecretTokenData | None:
        """Find a token by lookup id, in any state.

        Args:
            for_update: Lock the row for the rest of the transaction.
        """
        ...

    async def supersede_unused(
        self,
        user_id: UUID,
        purpose: SecretTokenPurpose,
        now: datetime,
    ) -> int:
        """Mark every unused token of the holder/purpose as used.

        Returns:
            Number of tokens superseded.
        """
        ...

    async def mark_used(self, token_id: UUID, now: datetime) -> bool:
        """Set used = true, used_at = now only if still unused.

        Returns:
            True if this call marked the token, False if another
            transaction got there first.
        """
        ...

    async def count_unused(self, user_id: UUID, purpose: SecretTokenPurpose) -> int:
        """Count unused tokens (0 or 1 when the invariant holds)."""
        ...
