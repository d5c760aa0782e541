"""SQLAlchemy credential store (unit of work).

Opens one database transaction per credential operation and exposes the
repositories bound to it. Driver errors that mean "another transaction got
in the way" are re-raised as StoreConflict so the application layer can
retry the whole unit of work; every other database error propagates
unchanged.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from credential_issuer.domain.protocols.credential_store_protocol import (
    StoreConflict,
)
from credential_issuer.infrastructure.persistence.database import Database
from credential_issuer.infrastructure.persistence.repositories import (
    SecretTokenRepository,
    SubPillarCounterRepository,
    VerificationCodeRepository,
)

# serialization_failure, deadlock_detected, unique_violation
CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "23505"})

_SQLITE_CONFLICT_MESSAGES = ("database is locked", "unique constraint failed")


def is_conflict(exc: DBAPIError) -> bool:
    """Tell whether a driver error is transient contention.

    Args:
        exc: Error raised by SQLAlchemy.

    Returns:
        True for PostgreSQL serialization failures, deadlocks and unique
        violations, and for SQLite lock and unique-constraint errors.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in CONFLICT_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(fragment in message for fragment in _SQLITE_CONFLICT_MESSAGES)


class SQLAlchemyUnitOfWork:
    """Repositories sharing one session (and therefore one transaction)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.counters = SubPillarCounterRepository(session)
        self.verification_codes = VerificationCodeRepository(session)
        self.secret_tokens = SecretTokenRepository(session)


class SQLAlchemyCredentialStore:
    """CredentialStoreProtocol implementation on top of Database.

    The transaction commits when the ``async with`` block exits normally,
    including when the operation produced a Failure (so retry counters and
    lock-outs persist). It rolls back when an exception escapes.

    Usage:
        store = SQLAlchemyCredentialStore(database)
        async with store.transaction() as uow:
            number = await uow.counters.increment(sub_pillar)
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLAlchemyUnitOfWork]:
        """Open a transaction.

        Raises:
            StoreConflict: On contention, either while running statements or
                at commit.
        """
        try:
            async with self._database.transaction() as session:
                yield SQLAlchemyUnitOfWork(session)
        except DBAPIError as exc:
            if is_conflict(exc):
                raise StoreConflict(str(exc.orig)) from exc
            raise
