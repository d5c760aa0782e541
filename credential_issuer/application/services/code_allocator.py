"""Student code allocation.

CodeAllocator hands out sequential numbers from one of 81 fixed
sub-pillars, backed by one counter row per sub-pillar. StudentCodeGenerator
picks the sub-pillar at random for callers that do not care which one.

Flow (allocate_next):
1. Validate the sub-pillar base
2. Atomically increment (or create) the counter row
3. No row returned means the sub-pillar is exhausted
4. Format the number as a six-digit code

Architecture:
- Application layer ONLY imports from core and domain
- Store adapter is injected via CredentialStoreProtocol
"""

from collections.abc import Sequence

from credential_issuer.application.services.transaction_retry import (
    run_in_transaction,
)
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.errors import DomainError, ValidationError
from credential_issuer.core.result import Failure, Result, Success
from credential_issuer.domain.errors import AllocationError, CredentialErrorMessage
from credential_issuer.domain.protocols import (
    CredentialGeneratorProtocol,
    CredentialStoreProtocol,
    CredentialUnitOfWork,
    LoggerProtocol,
)
from credential_issuer.domain.value_objects import StudentCode, SubPillar


class CodeAllocator:
    """Issue unique student codes from partitioned counters.

    Guarantees:
        - Numbers from one sub-pillar are issued in order, starting at
          ``base + 1`` and ending at ``base + 9999``
        - Concurrent callers never receive the same number
        - Once exhausted, a sub-pillar keeps failing and its counter
          stays at ``base + 9999``

    Example:
        >>> allocator = CodeAllocator(store, logger)
        >>> result = await allocator.allocate_next(110000)
        >>> result.value.value
        '110001'
    """

    def __init__(
        self,
        store: CredentialStoreProtocol,
        logger: LoggerProtocol,
        *,
        max_conflict_retries: int = 5,
    ) -> None:
        """Initialize allocator with dependencies.

        Args:
            store: Credential store (counter persistence).
            logger: Structured logger.
            max_conflict_retries: Retries on store contention.
        """
        self._store = store
        self._logger = logger
        self._max_conflict_retries = max_conflict_retries

    async def allocate_next(self, sub_pillar_base: int) -> Result[StudentCode, DomainError]:
        """Issue the next code from a sub-pillar.

        Args:
            sub_pillar_base: One of the 81 bases (110000 ... 190000, 210000
                ... 990000).

        Returns:
            Success(StudentCode): Newly issued code.
            Failure(ValidationError): INVALID_SUB_PILLAR.
            Failure(AllocationError): PILLAR_EXHAUSTED.
            Failure(ConflictError): CONFLICT after retries.
        """
        try:
            sub_pillar = SubPillar.from_base(sub_pillar_base)
        except ValueError:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_SUB_PILLAR,
                    message=CredentialErrorMessage.INVALID_SUB_PILLAR,
                    field="sub_pillar_base",
                )
            )

        async def work(uow: CredentialUnitOfWork) -> Result[StudentCode, DomainError]:
            number = await uow.counters.increment(sub_pillar)
            if number is None:
                return Failure(
                    error=AllocationError(
                        code=ErrorCode.PILLAR_EXHAUSTED,
                        message=CredentialErrorMessage.PILLAR_EXHAUSTED,
                        sub_pillar_base=sub_pillar.base,
                    )
                )
            return Success(value=StudentCode(number=number, sub_pillar=sub_pillar))

        result = await run_in_transaction(
            self._store,
            work,
            resource_type="sub_pillar_counter",
            max_retries=self._max_conflict_retries,
            logger=self._logger,
        )

        match result:
            case Success(value=code):
                self._logger.info(
                    "student_code_allocated",
                    sub_pillar_base=sub_pillar.base,
                    student_code=code.value,
                )
            case Failure(error=error):
                self._logger.warning(
                    "student_code_allocation_failed",
                    sub_pillar_base=sub_pillar.base,
                    error_code=error.code.value,
                )
        return result


class StudentCodeGenerator:
    """Allocate a student code from a randomly chosen sub-pillar.

    With failover enabled, an exhausted sub-pillar is dropped from the
    candidates and another one is tried, up to ``max_attempts`` picks.
    With failover disabled the first result is returned as is.
    """

    def __init__(
        self,
        allocator: CodeAllocator,
        generator: CredentialGeneratorProtocol,
        logger: LoggerProtocol,
        *,
        failover_enabled: bool = False,
        max_attempts: int = 100,
        sub_pillars: Sequence[SubPillar] | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            allocator: Allocator doing the actual issue.
            generator: Random source for the sub-pillar pick.
            logger: Structured logger.
            failover_enabled: Retry on another sub-pillar when exhausted.
            max_attempts: Upper bound on picks when failover is enabled.
            sub_pillars: Candidate sub-pillars (default: all 81).
        """
        self._allocator = allocator
        self._generator = generator
        self._logger = logger
        self._failover_enabled = failover_enabled
        self._max_attempts = max_attempts
        self._sub_pillars = list(sub_pillars) if sub_pillars else SubPillar.all()

    async def generate(self) -> Result[StudentCode, DomainError]:
        """Issue a code from a random sub-pillar.

        Returns:
            Success(StudentCode), or the last allocation failure.
        """
        candidates = list(self._sub_pillars)
        attempts = self._max_attempts if self._failover_enabled else 1

        result: Result[StudentCode, DomainError]
        for attempt in range(1, attempts + 1):
            sub_pillar = self._generator.choice(candidates)
            result = await self._allocator.allocate_next(sub_pillar.base)

            if not self._should_fail_over(result):
                return result

            candidates.remove(sub_pillar)
            self._logger.info(
                "student_code_failover",
                exhausted_sub_pillar=sub_pillar.base,
                attempt=attempt,
                remaining_candidates=len(candidates),
            )
            if not candidates:
                self._logger.critical(
                    "student_code_sub_pillars_exhausted", attempts=attempt
                )
                break

        return result

    def _should_fail_over(self, result: Result[StudentCode, DomainError]) -> bool:
        match result:
            case Failure(error=error) if error.code == ErrorCode.PILLAR_EXHAUSTED:
                return self._failover_enabled
            case _:
                return False
