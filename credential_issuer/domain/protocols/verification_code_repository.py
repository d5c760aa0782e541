"""VerificationCodeRepository protocol (port) for domain layer.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from credential_issuer.domain.enums import VerificationPurpose


@dataclass
class VerificationCodeData:
    """Data transfer object for a verification code row.

    Used by protocol methods to return code data without exposing
    infrastructure model classes to domain/application layers.
    """

    id: UUID
    user_id: UUID
    code: str
    purpose: VerificationPurpose
    expires_at: datetime
    retry_count: int
    created_at: datetime
    consumed_at: datetime | None

    @property
    def is_consumed(self) -> bool:
        return self.consumed_at is not None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def is_active(self, now: datetime) -> bool:
        return not self.is_consumed and not self.is_expired(now)


class VerificationCodeRepository(Protocol):
    """Protocol for verification code persistence operations.

    Code Lifecycle:
        1. Created on issue/resend (ACTIVE)
        2. retry_count incremented on each failed validation
        3. consumed_at set on success, on supersession by resend, or on lock-out
        4. Expiry evaluated lazily by comparing expires_at with now
        5. Never physically deleted

    Implementations:
        - VerificationCodeRepository (SQLAlchemy): credential_issuer/infrastructure/persistence/repositories/
    """

    async def save(
        self,
        user_id: UUID,
        code: str,
        purpose: VerificationPurpose,
        expires_at: datetime,
    ) -> VerificationCodeData:
        """Insert a new ACTIVE code with retry_count 0."""
        ...

    async def find_active(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        now: datetime,
        *,
        for_update: bool = False,
    ) -> VerificationCodeData | None:
        """Find the newest active code (not consumed, expires_at > now).

        Args:
            for_update: Lock the row for the rest of the transaction.
        """
        ...

    async def find_latest(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
    ) -> VerificationCodeData | None:
        """Find the newest code in any state."""
        ...

    async def find_latest_by_code(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        code: str,
    ) -> VerificationCodeData | None:
        """Find the newest code in any state whose value equals ``code``."""
        ...

    async def supersede_active(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        now: datetime,
    ) -> int:
        """Set consumed_at = now on every active code.

        Returns:
            Number of codes superseded.
        """
        ...

    async def mark_consumed(self, code_id: UUID, now: datetime) -> bool:
        """Set consumed_at = now if the code is not consumed yet.

        Returns:
            True if this call consumed the code, False if it already was.
        """
        ...

    async def increment_retry_count(self, code_id: UUID) -> int:
        """Atomically add one failed attempt.

        Returns:
            The new retry count.
        """
        ...

    async def count_active(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        now: datetime,
    ) -> int:
        """Count active codes (0 or 1 when the invariant holds)."""
        ...
