"""SecretTokenRepository - SQLAlchemy implementation for secret tokens.

Handles creation, lookup, supersession and one-time use of secret tokens.
All writes are flushed into the caller's transaction.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from credential_issuer.domain.enums import SecretTokenPurpose
from credential_issuer.domain.protocols.secret_token_repository import (
    SecretTokenData,
)
from credential_issuer.infrastructure.persistence.models.secret_token import (
    SecretToken,
)


def _to_data(model: SecretToken) -> SecretTokenData:
    """Convert database model to domain DTO."""
    return SecretTokenData(
        id=model.id,
        user_id=model.user_id,
        lookup_id=model.lookup_id,
        secret_hash=model.secret_hash,
        purpose=SecretTokenPurpose(model.purpose),
        expires_at=model.expires_at,
        used=model.used,
        used_at=model.used_at,
        created_at=model.created_at,
        payload=dict(model.payload or {}),
    )


class SecretTokenRepository:
    """SQLAlchemy implementation for secret token persistence.

    Manages secret tokens with support for:
    - Token creation (hash only, never the raw secret)
    - Lookup by the public lookup id
    - Supersession of the holder's previous unused token
    - One-time use enforcement through a conditional update

    Attributes:
        session: SQLAlchemy async session bound to the current transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(
        self,
        user_id: UUID,
        purpose: SecretTokenPurpose,
        lookup_id: UUID,
        secret_hash: str,
        expires_at: datetime,
        payload: dict[str, Any] | None = None,
    ) -> SecretTokenData:
        """Insert a new unused token.

        Raises:
            IntegrityError: If another unused token exists for the holder and
                purpose (translated to StoreConflict by the credential store).
        """
        model = SecretToken(
            user_id=user_id,
            purpose=purpose.value,
            lookup_id=lookup_id,
            secret_hash=secret_hash,
            expires_at=expires_at,
            used=False,
            payload=payload,
        )
        self.session.add(model)
        await self.session.flush()
        return _to_data(model)

    async def find_by_lookup_id(
        self,
        lookup_id: UUID,
        *,
        for_update: bool = False,
    ) -> SecretTokenData | None:
        stmt = select(SecretToken).where(SecretToken.lookup_id == lookup_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def supersede_unused(
        self,
        user_id: UUID,
        purpose: SecretTokenPurpose,
        now: datetime,
    ) -> int:
        stmt = (
            update(SecretToken)
            .where(SecretToken.user_id == user_id)
            .where(SecretToken.purpose == purpose.value)
            .where(SecretToken.used.is_(False))
            .values(used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def mark_used(self, token_id: UUID, now: datetime) -> bool:
        stmt = (
            update(SecretToken)
            .where(SecretToken.id == token_id)
            .where(SecretToken.used.is_(False))
            .values(used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def count_unused(self, user_id: UUID, purpose: SecretTokenPurpose) -> int:
        stmt = (
            select(func.count())
            .select_from(SecretToken)
            .where(SecretToken.user_id == user_id)
            .where(SecretToken.purpose == purpose.value)
            .where(SecretToken.used.is_(False))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
