"""SubPillarCounterRepository - SQLAlchemy implementation of the allocation counter.

Allocation is one ``INSERT ... ON CONFLICT DO UPDATE ... WHERE ... RETURNING``
statement, so the read-modify-write is atomic inside the database and
same-base callers queue on the row lock.
"""

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from credential_issuer.domain.value_objects import SubPillar
from credential_issuer.infrastructure.persistence.base import utc_now
from credential_issuer.infrastructure.persistence.models.sub_pillar_counter import (
    SubPillarCounter,
)


class SubPillarCounterRepository:
    """SQLAlchemy implementation for sub-pillar counters.

    Attributes:
        session: SQLAlchemy async session bound to the current transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def increment(self, sub_pillar: SubPillar) -> int | None:
        """Issue the next number from a sub-pillar.

        Inserts ``base + 1`` when the row is missing, otherwise adds one as
        long as the result stays inside the sub-pillar. An exhausted
        sub-pillar matches the conflict WHERE clause on nothing, so no row
        is returned and nothing changes.

        Returns:
            The issued number, or None if the sub-pillar is exhausted.
        """
        now = utc_now()
        insert = (
            postgresql.insert
            if self.session.get_bind().dialect.name == "postgresql"
            else sqlite.insert
        )
        stmt = insert(SubPillarCounter).values(
            sub_pillar_base=sub_pillar.base,
            last_issued_number=sub_pillar.first_code,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SubPillarCounter.sub_pillar_base],
            set_={
                "last_issued_number": SubPillarCounter.last_issued_number + 1,
                "updated_at": now,
            },
            where=SubPillarCounter.last_issued_number < sub_pillar.last_code,
        ).returning(SubPillarCounter.last_issued_number)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_last_issued(self, sub_pillar: SubPillar) -> int | None:
        """Return the counter value, or None if nothing was ever issued."""
        stmt = select(SubPillarCounter.last_issued_number).where(
            SubPillarCounter.sub_pillar_base == sub_pillar.base
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
