"""CredentialStoreProtocol - transactional unit of work over credential tables.

Every credential operation runs inside exactly one store transaction. The
unit of work exposes the three repositories bound to that transaction; it
commits when the ``async with`` block exits normally and rolls back when an
exception escapes it.

Usage:
    async with store.transaction() as uow:
        await uow.secret_tokens.supersede_unused(user_id, purpose, now)
        await uow.secret_tokens.save(...)
    # committed here
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from credential_issuer.domain.protocols.secret_token_repository import (
    SecretTokenRepository,
)
from credential_issuer.domain.protocols.sub_pillar_counter_repository import (
    SubPillarCounterRepository,
)
from credential_issuer.domain.protocols.verification_code_repository import (
    VerificationCodeRepository,
)


class StoreConflict(Exception):
    """Transient contention reported by the store.

    Raised for serialization failures, deadlocks, lock timeouts and
    unique-index races. The whole transaction was rolled back and may be
    retried from the start.
    """


class CredentialUnitOfWork(Protocol):
    """Repositories sharing one open transaction."""

    counters: SubPillarCounterRepository
    verification_codes: VerificationCodeRepository
    secret_tokens: SecretTokenRepository


class CredentialStoreProtocol(Protocol):
    """Protocol for opening credential transactions.

    Implementations:
        - SQLAlchemyCredentialStore: credential_issuer/infrastructure/persistence/credential_store.py
    """

    def transaction(self) -> AbstractAsyncContextManager[CredentialUnitOfWork]:
        """Open a transaction.

        Raises:
            StoreConflict: On commit or statement failure caused by
                concurrent transactions.
        """
        ...
