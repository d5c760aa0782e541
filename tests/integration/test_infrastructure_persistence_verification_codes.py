"""Integration tests for verification codes against SQLite.

Tests cover:
- Expiry boundary scenario (t0, t0+4m59s, t0+5m01s)
- Resend supersedes the previous code
- Lock-out after the maximum number of failed attempts persists
- Delivery through the stub dispatcher
- Concurrent validations of one code consume it exactly once

Architecture:
- Real SQLAlchemyCredentialStore over a temporary SQLite file
- freezegun controls the clock (asyncio keeps the real clock)
- Codes come from a deterministic generator so they never collide
"""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from credential_issuer.application.services import VerificationCodeManager
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.result import Failure, Success
from credential_issuer.domain.enums import VerificationPurpose
from credential_issuer.domain.notifications import (
    ResendVerificationCodeNotification,
    VerificationCodeNotification,
)

REGISTRATION = VerificationPurpose.REGISTRATION
T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)


@pytest.fixture
def sequential_codes():
    """Generator handing out 100001, 100002, ... as codes."""
    counter = iter(range(100001, 200000))
    generator = MagicMock()
    generator.numeric_code.side_effect = lambda length: str(next(counter))
    return generator


@pytest.fixture
def manager(store, sequential_codes, dispatcher, mock_logger):
    return VerificationCodeManager(
        store, sequential_codes, dispatcher, mock_logger, max_attempts=3
    )


def error_code(result) -> ErrorCode:
    assert isinstance(result, Failure)
    return result.error.code


@pytest.mark.integration
class TestVerificationCodeLifecycle:
    """End-to-end code lifecycle with a real store."""

    async def test_expiry_boundary_scenario(self, manager):
        user = uuid7()
        other_user = uuid7()

        with freeze_time(T0, real_asyncio=True) as clock:
            code = (await manager.issue(user, REGISTRATION)).value
            late_code = (await manager.issue(other_user, REGISTRATION)).value

            clock.move_to(T0 + timedelta(minutes=4, seconds=59))
            assert await manager.validate(user, REGISTRATION, code) == Success(value=None)
            assert error_code(
                await manager.validate(user, REGISTRATION, code)
            ) == ErrorCode.CODE_ALREADY_CONSUMED

            clock.move_to(T0 + timedelta(minutes=5, seconds=1))
            assert error_code(
                await manager.validate(other_user, REGISTRATION, late_code)
            ) == ErrorCode.CODE_EXPIRED

    async def test_code_expires_exactly_at_ttl(self, manager):
        user = uuid7()

        with freeze_time(T0, real_asyncio=True) as clock:
            code = (await manager.issue(user, REGISTRATION)).value

            clock.move_to(T0 + timedelta(minutes=5))
            result = await manager.validate(user, REGISTRATION, code)

        assert error_code(result) == ErrorCode.CODE_EXPIRED

    async def test_resend_supersedes_previous_code(self, manager, dispatcher):
        user = uuid7()

        with freeze_time(T0, real_asyncio=True) as clock:
            old_code = (await manager.issue(user, REGISTRATION)).value
            clock.tick(timedelta(seconds=30))
            new_code = (await manager.resend(user, REGISTRATION)).value
            clock.tick(timedelta(seconds=30))

            assert old_code != new_code
            assert (await manager.count_active(user, REGISTRATION)).value == 1
            assert error_code(
                await manager.validate(user, REGISTRATION, old_code)
            ) == ErrorCode.CODE_ALREADY_CONSUMED
            assert await manager.validate(user, REGISTRATION, new_code) == Success(
                value=None
            )

        assert [type(sent.notification) for sent in dispatcher.sent] == [
            VerificationCodeNotification,
            ResendVerificationCodeNotification,
        ]
        assert dispatcher.last_code_for(user) == new_code

    async def test_wrong_code_does_not_consume_active_code(self, manager):
        user = uuid7()

        with freeze_time(T0, real_asyncio=True) as clock:
            code = (await manager.issue(user, REGISTRATION)).value
            clock.tick(timedelta(seconds=10))

            assert error_code(
                await manager.validate(user, REGISTRATION, "999999")
            ) == ErrorCode.INVALID_CODE
            assert await manager.validate(user, REGISTRATION, code) == Success(value=None)

    async def test_lock_out_after_max_attempts(self, manager):
        user = uuid7()

        with freeze_time(T0, real_asyncio=True) as clock:
            code = (await manager.issue(user, REGISTRATION)).value
            outcomes = []
            for _ in range(3):
                clock.tick(timedelta(seconds=5))
                result = await manager.validate(user, REGISTRATION, "999999")
                outcomes.append((result.error.code, result.error.retry_count))

            clock.tick(timedelta(seconds=5))
            after_lock_out = await manager.validate(user, REGISTRATION, code)

        assert outcomes == [
            (ErrorCode.INVALID_CODE, 1),
            (ErrorCode.INVALID_CODE, 2),
            (ErrorCode.CODE_ATTEMPTS_EXCEEDED, 3),
        ]
        assert error_code(after_lock_out) == ErrorCode.CODE_ATTEMPTS_EXCEEDED

    async def test_no_code_issued(self, manager):
        result = await manager.validate(uuid7(), REGISTRATION, "123456")

        assert error_code(result) == ErrorCode.INVALID_CODE

    async def test_purposes_are_separate(self, manager):
        user = uuid7()

        with freeze_time(T0, real_asyncio=True):
            code = (await manager.issue(user, REGISTRATION)).value

            result = await manager.validate(user, VerificationPurpose.EMAIL_CHANGE, code)

        assert error_code(result) == ErrorCode.INVALID_CODE

    async def test_second_issue_keeps_first_code_active(self, manager):
        user = uuid7()

        with freeze_time(T0, real_asyncio=True) as clock:
            first = (await manager.issue(user, REGISTRATION)).value
            clock.tick(timedelta(seconds=1))
            await manager.issue(user, REGISTRATION)

            assert (await manager.count_active(user, REGISTRATION)).value == 2
            assert await manager.validate(user, REGISTRATION, first) == Success(
                value=None
            )


@pytest.mark.integration
class TestConcurrentValidation:
    """A code is consumed exactly once under concurrent validation."""

    @pytest.mark.parametrize("attempts", [2, 5])
    async def test_only_one_concurrent_validation_succeeds(self, manager, attempts):
        user = uuid7()
        code = (await manager.issue(user, REGISTRATION)).value

        results = await asyncio.gather(
            *(manager.validate(user, REGISTRATION, code) for _ in range(attempts))
        )

        assert results.count(Success(value=None)) == 1
        assert [error_code(r) for r in results if isinstance(r, Failure)] == [
            ErrorCode.CODE_ALREADY_CONSUMED
        ] * (attempts - 1)
        assert (await manager.count_active(user, REGISTRATION)).value == 0
