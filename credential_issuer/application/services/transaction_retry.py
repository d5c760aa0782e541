"""Run a unit of work in a store transaction, retrying on contention.

The unit of work is re-executed from scratch on every attempt, so it must
derive everything it writes from what it reads inside the transaction.
Business failures (``Failure`` results) are committed like successes and
never retried; only ``StoreConflict`` triggers another attempt.
"""

import asyncio
from collections.abc import Awaitable, Callable

from credential_issuer.core.constants import STORE_CONFLICT_BACKOFF_SECONDS
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.errors import ConflictError, DomainError
from credential_issuer.core.result import Failure, Result
from credential_issuer.domain.protocols import (
    CredentialStoreProtocol,
    CredentialUnitOfWork,
    LoggerProtocol,
    StoreConflict,
)

type UnitOfWorkFn[T] = Callable[
    [CredentialUnitOfWork], Awaitable[Result[T, DomainError]]
]


async def run_in_transaction[T](
    store: CredentialStoreProtocol,
    work: UnitOfWorkFn[T],
    *,
    resource_type: str,
    max_retries: int,
    logger: LoggerProtocol,
) -> Result[T, DomainError]:
    """Execute ``work`` in one transaction with bounded conflict retries.

    Args:
        store: Credential store opening the transaction.
        work: Coroutine function receiving the unit of work.
        resource_type: Credential kind, for logs and the ConflictError.
        max_retries: Retries after the first attempt.
        logger: Logger for conflict warnings.

    Returns:
        Whatever ``work`` returned, or Failure(ConflictError) once every
        attempt hit a conflict.
    """
    attempts = max_retries + 1
    for attempt in range(1, attempts + 1):
        try:
            async with store.transaction() as uow:
                result = await work(uow)
            return result
        except StoreConflict as e:
            logger.warning(
                "store_conflict",
                resource_type=resource_type,
                attempt=attempt,
                max_attempts=attempts,
                error=str(e),
            )
            if attempt < attempts:
                await asyncio.sleep(STORE_CONFLICT_BACKOFF_SECONDS * attempt)

    return Failure(
        error=ConflictError(
            code=ErrorCode.CONFLICT,
            message="Store contention persisted after retries",
            resource_type=resource_type,
            attempts=attempts,
        )
    )
