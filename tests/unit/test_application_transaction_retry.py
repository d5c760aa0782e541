"""Unit tests for run_in_transaction.

Tests cover:
- Result passthrough (success and business failure)
- Retry after StoreConflict
- ConflictError once retries are exhausted
- Zero retries means one attempt
- Non-conflict exceptions propagate
"""

from unittest.mock import AsyncMock

import pytest

from credential_issuer.application.services import run_in_transaction
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.errors import ConflictError, ValidationError
from credential_issuer.core.result import Failure, Success


@pytest.mark.unit
class TestRunInTransaction:
    """Test bounded conflict retries."""

    async def test_returns_work_result(self, fake_store, mock_logger):
        work = AsyncMock(return_value=Success(value=7))

        result = await run_in_transaction(
            fake_store, work, resource_type="x", max_retries=3, logger=mock_logger
        )

        assert result == Success(value=7)
        work.assert_awaited_once_with(fake_store.uow)
        mock_logger.warning.assert_not_called()

    async def test_business_failure_is_not_retried(self, fake_store, mock_logger):
        failure = Failure(
            error=ValidationError(code=ErrorCode.INVALID_SUB_PILLAR, message="bad")
        )
        work = AsyncMock(return_value=failure)

        result = await run_in_transaction(
            fake_store, work, resource_type="x", max_retries=3, logger=mock_logger
        )

        assert result is failure
        assert fake_store.transactions == 1

    async def test_retries_after_conflict(self, conflicting_store, mock_logger):
        store = conflicting_store(2)
        work = AsyncMock(return_value=Success(value="ok"))

        result = await run_in_transaction(
            store, work, resource_type="secret_token", max_retries=3, logger=mock_logger
        )

        assert result == Success(value="ok")
        assert store.transactions == 3
        assert mock_logger.warning.call_count == 2
        mock_logger.warning.assert_called_with(
            "store_conflict",
            resource_type="secret_token",
            attempt=2,
            max_attempts=4,
            error="could not serialize access",
        )

    async def test_conflict_error_after_retries(self, conflicting_store, mock_logger):
        store = conflicting_store(100)
        work = AsyncMock(return_value=Success(value="never"))

        result = await run_in_transaction(
            store,
            work,
            resource_type="sub_pillar_counter",
            max_retries=2,
            logger=mock_logger,
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.CONFLICT
        assert result.error.resource_type == "sub_pillar_counter"
        assert result.error.attempts == 3
        assert store.transactions == 3
        work.assert_not_awaited()

    async def test_zero_retries_makes_a_single_attempt(
        self, conflicting_store, mock_logger
    ):
        store = conflicting_store(1)
        work = AsyncMock(return_value=Success(value="never"))

        result = await run_in_transaction(
            store, work, resource_type="x", max_retries=0, logger=mock_logger
        )

        assert isinstance(result, Failure)
        assert result.error.attempts == 1
        assert store.transactions == 1

    async def test_other_exceptions_propagate(self, fake_store, mock_logger):
        work = AsyncMock(side_effect=RuntimeError("disk full"))

        with pytest.raises(RuntimeError, match="disk full"):
            await run_in_transaction(
                fake_store, work, resource_type="x", max_retries=3, logger=mock_logger
            )

        assert fake_store.transactions == 1
