"""Verification code lifecycle (issue, resend, validate).

State machine per (user_id, purpose):

    NONE -> ACTIVE -> CONSUMED | EXPIRED | SUPERSEDED

ACTIVE means consumed_at is null and expires_at is in the future. Success,
supersession by a resend, and lock-out after too many failed attempts all
set consumed_at; expiry is never written, it is derived from expires_at.

Validation outcomes:
1. Active code matches -> consumed, success
2. Code matches a code that is no longer active -> CODE_ALREADY_CONSUMED
   (or CODE_ATTEMPTS_EXCEEDED if it was locked out) / CODE_EXPIRED
3. Active code differs -> retry_count + 1, INVALID_CODE; lock-out with
   CODE_ATTEMPTS_EXCEEDED once max_attempts is reached
4. No active code -> the latest code decides, INVALID_CODE if none exists

Architecture:
- Application layer ONLY imports from core and domain
- One store transaction per operation; notification after commit
"""

import secrets
from collections.abc import Awaitable, Callable, Mapping
from datetime import UTC, datetime, timedelta
from uuid import UUID

from credential_issuer.application.services.transaction_retry import (
    UnitOfWorkFn,
    run_in_transaction,
)
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.errors import DomainError
from credential_issuer.core.result import Failure, Result, Success
from credential_issuer.domain.enums import VerificationPurpose
from credential_issuer.domain.errors import (
    CredentialErrorMessage,
    VerificationCodeError,
)
from credential_issuer.domain.protocols import (
    CredentialGeneratorProtocol,
    CredentialStoreProtocol,
    CredentialUnitOfWork,
    LoggerProtocol,
    NotificationProtocol,
    VerificationCodeData,
)

DEFAULT_CODE_TTLS: Mapping[VerificationPurpose, timedelta] = {
    VerificationPurpose.REGISTRATION: timedelta(minutes=5),
    VerificationPurpose.EMAIL_CHANGE: timedelta(minutes=5),
}

type SendCode = Callable[[UUID, str], Awaitable[Result[None, DomainError]]]

_MESSAGES: Mapping[ErrorCode, str] = {
    ErrorCode.INVALID_CODE: CredentialErrorMessage.INVALID_CODE,
    ErrorCode.CODE_EXPIRED: CredentialErrorMessage.CODE_EXPIRED,
    ErrorCode.CODE_ALREADY_CONSUMED: CredentialErrorMessage.CODE_ALREADY_CONSUMED,
    ErrorCode.CODE_ATTEMPTS_EXCEEDED: CredentialErrorMessage.CODE_ATTEMPTS_EXCEEDED,
}


class VerificationCodeManager:
    """Issue and validate short numeric verification codes.

    Dependencies (injected via constructor):
        - CredentialStoreProtocol: Transactions over verification codes
        - CredentialGeneratorProtocol: Random digits
        - NotificationProtocol: Delivery of issued codes
        - LoggerProtocol: Structured logging

    Example:
        >>> result = await manager.issue(user_id, VerificationPurpose.REGISTRATION)
        >>> await manager.validate(user_id, VerificationPurpose.REGISTRATION, "042917")
        Success(value=None)
    """

    def __init__(
        self,
        store: CredentialStoreProtocol,
        generator: CredentialGeneratorProtocol,
        notifier: NotificationProtocol,
        logger: LoggerProtocol,
        *,
        code_length: int = 6,
        ttls: Mapping[VerificationPurpose, timedelta] = DEFAULT_CODE_TTLS,
        max_attempts: int | None = 3,
        max_conflict_retries: int = 5,
    ) -> None:
        """Initialize manager with dependencies.

        Args:
            store: Credential store.
            generator: Random code source.
            notifier: Notification delivery.
            logger: Structured logger.
            code_length: Number of digits per code.
            ttls: Lifetime of a code per purpose.
            max_attempts: Failed attempts that lock a code out (None: never).
            max_conflict_retries: Retries on store contention.
        """
        self._store = store
        self._generator = generator
        self._notifier = notifier
        self._logger = logger
        self._code_length = code_length
        self._ttls = dict(ttls)
        self._max_attempts = max_attempts
        self._max_conflict_retries = max_conflict_retries

    async def issue(
        self, user_id: UUID, purpose: VerificationPurpose
    ) -> Result[str, DomainError]:
        """Create a new active code and send it to the user.

        Existing codes are left untouched; use ``resend`` to replace one.

        Returns:
            Success(str): The issued code.
            Failure(ConflictError): CONFLICT after retries.
        """
        code = self._generator.numeric_code(self._code_length)

        async def work(uow: CredentialUnitOfWork) -> Result[str, DomainError]:
            now = datetime.now(UTC)
            await uow.verification_codes.save(
                user_id, code, purpose, now + self._ttls[purpose]
            )
            return Success(value=code)

        result = await self._run(work)
        if isinstance(result, Success):
            self._logger.info(
                "verification_code_issued",
                user_id=str(user_id),
                purpose=purpose.value,
            )
            await self._deliver(
                self._notifier.send_verification_code, user_id, purpose, code
            )
        return result

    async def resend(
        self, user_id: UUID, purpose: VerificationPurpose
    ) -> Result[str, DomainError]:
        """Supersede every active code and issue a fresh one atomically.

        Returns:
            Success(str): The new code. Earlier codes never validate again.
            Failure(ConflictError): CONFLICT after retries.
        """
        code = self._generator.numeric_code(self._code_length)

        async def work(uow: CredentialUnitOfWork) -> Result[str, DomainError]:
            now = datetime.now(UTC)
            superseded = await uow.verification_codes.supersede_active(
                user_id, purpose, now
            )
            await uow.verification_codes.save(
                user_id, code, purpose, now + self._ttls[purpose]
            )
            self._logger.debug(
                "verification_codes_superseded",
                user_id=str(user_id),
                purpose=purpose.value,
                count=superseded,
            )
            return Success(value=code)

        result = await self._run(work)
        if isinstance(result, Success):
            self._logger.info(
                "verification_code_resent",
                user_id=str(user_id),
                purpose=purpose.value,
            )
            await self._deliver(
                self._notifier.send_resend_verification_code, user_id, purpose, code
            )
        return result

    async def validate(
        self, user_id: UUID, purpose: VerificationPurpose, submitted_code: str
    ) -> Result[None, DomainError]:
        """Check a submitted code and consume it on success.

        Returns:
            Success(None): Code accepted and consumed.
            Failure(VerificationCodeError): INVALID_CODE, CODE_EXPIRED,
                CODE_ALREADY_CONSUMED or CODE_ATTEMPTS_EXCEEDED.
            Failure(ConflictError): CONFLICT after retries.
        """

        async def work(uow: CredentialUnitOfWork) -> Result[None, DomainError]:
            now = datetime.now(UTC)
            codes = uow.verification_codes

            active = await codes.find_active(user_id, purpose, now, for_update=True)
            if active is not None and _codes_match(active.code, submitted_code):
                return await self._consume(uow, active, now)

            matched = await codes.find_latest_by_code(user_id, purpose, submitted_code)
            if matched is not None:
                if matched.is_active(now):
                    return await self._consume(uow, matched, now)
                return self._inactive_failure(matched, now)

            if active is not None:
                return await self._record_failed_attempt(uow, active, now)

            latest = await codes.find_latest(user_id, purpose)
            if latest is None:
                return self._failure(ErrorCode.INVALID_CODE, purpose)
            return self._inactive_failure(latest, now)

        result = await self._run(work)
        match result:
            case Success():
                self._logger.info(
                    "verification_code_validated",
                    user_id=str(user_id),
                    purpose=purpose.value,
                )
            case Failure(error=error):
                self._logger.warning(
                    "verification_code_rejected",
                    user_id=str(user_id),
                    purpose=purpose.value,
                    error_code=error.code.value,
                )
        return result

    async def count_active(
        self, user_id: UUID, purpose: VerificationPurpose
    ) -> Result[int, DomainError]:
        """Number of active codes for a holder (diagnostics)."""

        async def work(uow: CredentialUnitOfWork) -> Result[int, DomainError]:
            count = await uow.verification_codes.count_active(
                user_id, purpose, datetime.now(UTC)
            )
            return Success(value=count)

        return await self._run(work)

    async def _consume(
        self, uow: CredentialUnitOfWork, record: VerificationCodeData, now: datetime
    ) -> Result[None, DomainError]:
        if await uow.verification_codes.mark_consumed(record.id, now):
            return Success(value=None)
        return self._failure(ErrorCode.CODE_ALREADY_CONSUMED, record.purpose)

    async def _record_failed_attempt(
        self, uow: CredentialUnitOfWork, active: VerificationCodeData, now: datetime
    ) -> Result[None, DomainError]:
        retry_count = await uow.verification_codes.increment_retry_count(active.id)
        if self._max_attempts is not None and retry_count >= self._max_attempts:
            await uow.verification_codes.mark_consumed(active.id, now)
            return self._failure(
                ErrorCode.CODE_ATTEMPTS_EXCEEDED, active.purpose, retry_count
            )
        return self._failure(ErrorCode.INVALID_CODE, active.purpose, retry_count)

    def _inactive_failure(
        self, record: VerificationCodeData, now: datetime
    ) -> Failure[VerificationCodeError]:
        if record.is_consumed:
            if self._is_locked_out(record):
                return self._failure(
                    ErrorCode.CODE_ATTEMPTS_EXCEEDED, record.purpose, record.retry_count
                )
            return self._failure(ErrorCode.CODE_ALREADY_CONSUMED, record.purpose)
        return self._failure(ErrorCode.CODE_EXPIRED, record.purpose)

    def _is_locked_out(self, record: VerificationCodeData) -> bool:
        return self._max_attempts is not None and record.retry_count >= self._max_attempts

    def _failure(
        self,
        code: ErrorCode,
        purpose: VerificationPurpose,
        retry_count: int | None = None,
    ) -> Failure[VerificationCodeError]:
        return Failure(
            error=VerificationCodeError(
                code=code,
                message=_MESSAGES[code],
                purpose=purpose.value,
                retry_count=retry_count,
            )
        )

    async def _deliver(
        self,
        send: SendCode,
        user_id: UUID,
        purpose: VerificationPurpose,
        code: str,
    ) -> None:
        result = await send(user_id, code)
        if isinstance(result, Failure):
            self._logger.warning(
                "verification_code_delivery_failed",
                user_id=str(user_id),
                purpose=purpose.value,
                error_code=result.error.code.value,
                reason=result.error.message,
            )

    async def _run[T](self, work: UnitOfWorkFn[T]) -> Result[T, DomainError]:
        return await run_in_transaction(
            self._store,
            work,
            resource_type="verification_code",
            max_retries=self._max_conflict_retries,
            logger=self._logger,
        )


def _codes_match(expected: str, submitted: str) -> bool:
    return secrets.compare_digest(expected.encode("utf-8"), submitted.encode("utf-8"))
