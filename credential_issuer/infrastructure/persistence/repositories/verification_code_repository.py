"""VerificationCodeRepository - SQLAlchemy implementation for verification codes.

All writes are flushed into the caller's transaction; committing is the
credential store's job.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from credential_issuer.domain.enums import VerificationPurpose
from credential_issuer.domain.protocols.verification_code_repository import (
    VerificationCodeData,
)
from credential_issuer.infrastructure.persistence.models.verification_code import (
    VerificationCode,
)


def _to_data(model: VerificationCode) -> VerificationCodeData:
    """Convert database model to domain DTO."""
    return VerificationCodeData(
        id=model.id,
        user_id=model.user_id,
        code=model.code,
        purpose=VerificationPurpose(model.purpose),
        expires_at=model.expires_at,
        retry_count=model.retry_count,
        created_at=model.created_at,
        consumed_at=model.consumed_at,
    )


class VerificationCodeRepository:
    """SQLAlchemy implementation for verification code persistence.

    Attributes:
        session: SQLAlchemy async session bound to the current transaction.

    Example:
        >>> async with store.transaction() as uow:
        ...     active = await uow.verification_codes.find_active(
        ...         user_id, VerificationPurpose.REGISTRATION, now, for_update=True
        ...     )
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _holder(
        self, user_id: UUID, purpose: VerificationPurpose
    ) -> Select[tuple[VerificationCode]]:
        return select(VerificationCode).where(
            VerificationCode.user_id == user_id,
            VerificationCode.purpose == purpose.value,
        )

    async def save(
        self,
        user_id: UUID,
        code: str,
        purpose: VerificationPurpose,
        expires_at: datetime,
    ) -> VerificationCodeData:
        """Insert a new active code.

        Args:
            user_id: Holder of the code.
            code: Numeric code.
            purpose: Verification purpose.
            expires_at: Expiry timestamp.

        Returns:
            Created VerificationCodeData.
        """
        model = VerificationCode(
            user_id=user_id,
            code=code,
            purpose=purpose.value,
            expires_at=expires_at,
            retry_count=0,
        )
        self.session.add(model)
        await self.session.flush()
        return _to_data(model)

    async def find_active(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        now: datetime,
        *,
        for_update: bool = False,
    ) -> VerificationCodeData | None:
        stmt = (
            self._holder(user_id, purpose)
            .where(VerificationCode.consumed_at.is_(None))
            .where(VerificationCode.expires_at > now)
            .order_by(VerificationCode.created_at.desc(), VerificationCode.id.desc())
            .limit(1)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def find_latest(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
    ) -> VerificationCodeData | None:
        stmt = (
            self._holder(user_id, purpose)
            .order_by(VerificationCode.created_at.desc(), VerificationCode.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def find_latest_by_code(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        code: str,
    ) -> VerificationCodeData | None:
        stmt = (
            self._holder(user_id, purpose)
            .where(VerificationCode.code == code)
            .order_by(VerificationCode.created_at.desc(), VerificationCode.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def supersede_active(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        now: datetime,
    ) -> int:
        stmt = (
            update(VerificationCode)
            .where(VerificationCode.user_id == user_id)
            .where(VerificationCode.purpose == purpose.value)
            .where(VerificationCode.consumed_at.is_(None))
            .where(VerificationCode.expires_at > now)
            .values(consumed_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def mark_consumed(self, code_id: UUID, now: datetime) -> bool:
        stmt = (
            update(VerificationCode)
            .where(VerificationCode.id == code_id)
            .where(VerificationCode.consumed_at.is_(None))
            .values(consumed_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def increment_retry_count(self, code_id: UUID) -> int:
        stmt = (
            update(VerificationCode)
            .where(VerificationCode.id == code_id)
            .values(retry_count=VerificationCode.retry_count + 1)
            .returning(VerificationCode.retry_count)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_active(
        self,
        user_id: UUID,
        purpose: VerificationPurpose,
        now: datetime,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(VerificationCode)
            .where(VerificationCode.user_id == user_id)
            .where(VerificationCode.purpose == purpose.value)
            .where(VerificationCode.consumed_at.is_(None))
            .where(VerificationCode.expires_at > now)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
