"""Integration tests for student code allocation against SQLite.

Tests cover:
- First code of a sub-pillar is base + 1, then sequential
- Concurrent allocations on one base never collide
- Sub-pillars are independent
- Exhaustion leaves the counter at base + 9999
- Counter range check (base itself allowed, neighbours rejected)
- StudentCodeGenerator over real counters

Architecture:
- Real SQLAlchemyCredentialStore over a temporary SQLite file
- SQLite serializes writers with BEGIN IMMEDIATE
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from credential_issuer.application.services import CodeAllocator, StudentCodeGenerator
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.result import Failure, Success
from credential_issuer.domain.value_objects import SubPillar
from credential_issuer.infrastructure.persistence.models import SubPillarCounter


@pytest.fixture
def allocator(store, mock_logger):
    return CodeAllocator(store, mock_logger)


async def last_issued(store, base: int) -> int | None:
    async with store.transaction() as uow:
        return await uow.counters.get_last_issued(SubPillar.from_base(base))


@pytest.mark.integration
class TestCodeAllocatorIntegration:
    """Counter semantics with a real database."""

    async def test_first_code_is_base_plus_one(self, allocator, store):
        result = await allocator.allocate_next(560000)

        assert isinstance(result, Success)
        assert result.value.value == "560001"
        assert await last_issued(store, 560000) == 560001

    async def test_codes_are_sequential(self, allocator):
        values = []
        for _ in range(5):
            result = await allocator.allocate_next(110000)
            values.append(result.value.number)

        assert values == [110001, 110002, 110003, 110004, 110005]

    async def test_untouched_sub_pillar_has_no_counter(self, allocator, store):
        await allocator.allocate_next(110000)

        assert await last_issued(store, 120000) is None

    async def test_sub_pillars_are_independent(self, allocator):
        first = await allocator.allocate_next(110000)
        other = await allocator.allocate_next(990000)
        second = await allocator.allocate_next(110000)

        assert first.value.value == "110001"
        assert other.value.value == "990001"
        assert second.value.value == "110002"

    async def test_concurrent_allocations_are_unique(self, allocator):
        n = 25

        results = await asyncio.gather(
            *(allocator.allocate_next(560000) for _ in range(n))
        )

        assert all(isinstance(r, Success) for r in results)
        numbers = {r.value.number for r in results}
        assert numbers == set(range(560001, 560001 + n))

    async def test_exhaustion(self, allocator, store, database):
        async with database.transaction() as session:
            session.add(
                SubPillarCounter(sub_pillar_base=210000, last_issued_number=219998)
            )

        last = await allocator.allocate_next(210000)
        exhausted = await allocator.allocate_next(210000)
        again = await allocator.allocate_next(210000)

        assert isinstance(last, Success)
        assert last.value.value == "219999"
        assert isinstance(exhausted, Failure)
        assert exhausted.error.code == ErrorCode.PILLAR_EXHAUSTED
        assert exhausted.error.sub_pillar_base == 210000
        assert isinstance(again, Failure)
        assert await last_issued(store, 210000) == 219999

    async def test_counter_seeded_at_base_issues_first_code(
        self, allocator, store, database
    ):
        async with database.transaction() as session:
            session.add(
                SubPillarCounter(sub_pillar_base=560000, last_issued_number=560000)
            )

        result = await allocator.allocate_next(560000)

        assert isinstance(result, Success)
        assert result.value.value == "560001"
        assert await last_issued(store, 560000) == 560001

    @pytest.mark.parametrize("last_issued_number", [559999, 570000])
    async def test_counter_outside_its_sub_pillar_is_rejected(
        self, database, last_issued_number
    ):
        with pytest.raises(IntegrityError, match="ck_sub_pillar_counters_range"):
            async with database.transaction() as session:
                session.add(
                    SubPillarCounter(
                        sub_pillar_base=560000, last_issued_number=last_issued_number
                    )
                )

    async def test_invalid_base_touches_nothing(self, allocator, store):
        result = await allocator.allocate_next(100000)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_SUB_PILLAR


@pytest.mark.integration
class TestStudentCodeGeneratorIntegration:
    """Random sub-pillar pick with real counters."""

    async def test_generated_code_comes_from_a_valid_sub_pillar(
        self, allocator, generator, mock_logger
    ):
        codes = StudentCodeGenerator(allocator, generator, mock_logger)

        result = await codes.generate()

        assert isinstance(result, Success)
        assert result.value.sub_pillar in SubPillar.all()
        assert result.value.number == result.value.sub_pillar.first_code

    async def test_failover_skips_exhausted_sub_pillar(
        self, allocator, database, mock_logger
    ):
        async with database.transaction() as session:
            session.add(
                SubPillarCounter(sub_pillar_base=110000, last_issued_number=119999)
            )
        pick_first = MagicMock()
        pick_first.choice.side_effect = lambda options: options[0]
        codes = StudentCodeGenerator(
            allocator,
            pick_first,
            mock_logger,
            failover_enabled=True,
            sub_pillars=[SubPillar.from_base(110000), SubPillar.from_base(120000)],
        )

        result = await codes.generate()

        assert isinstance(result, Success)
        assert result.value.value == "120001"
