"""Secret token lifecycle (issue, validate) for password and email reset.

External token format: ``"{lookup_id}.{secret}"``. The lookup id locates
the row; the secret is only ever stored as a bcrypt hash.

Flow (issue):
1. Generate secret and lookup id, hash the secret in an executor thread
2. Supersede the holder's unused token of the same purpose
3. Insert the new row
4. Return the external token to the caller, who delivers it

Flow (validate):
1. Decode the external token (malformed -> TOKEN_INVALID)
2. Load the row by lookup id (short read transaction)
3. Reject: not found / other purpose -> TOKEN_NOT_FOUND, used ->
   TOKEN_ALREADY_USED, expired -> TOKEN_EXPIRED
4. Verify the secret in an executor thread, no transaction held
   (mismatch -> TOKEN_INVALID)
5. Second transaction: re-read the row with a row lock, re-check used and
   expiry, then conditional update used = true; losing a race ->
   TOKEN_ALREADY_USED
"""

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from functools import partial
from typing import Any
from uuid import UUID

from credential_issuer.application.services.transaction_retry import (
    UnitOfWorkFn,
    run_in_transaction,
)
from credential_issuer.core.enums import ErrorCode
from credential_issuer.core.errors import DomainError
from credential_issuer.core.result import Failure, Result, Success
from credential_issuer.domain.enums import SecretTokenPurpose
from credential_issuer.domain.errors import CredentialErrorMessage, SecretTokenError
from credential_issuer.domain.protocols import (
    CredentialGeneratorProtocol,
    CredentialStoreProtocol,
    CredentialUnitOfWork,
    LoggerProtocol,
    SecretHasherProtocol,
    SecretTokenData,
)
from credential_issuer.domain.value_objects import EmailResetPayload, ExternalToken

DEFAULT_TOKEN_TTLS: Mapping[SecretTokenPurpose, timedelta] = {
    SecretTokenPurpose.PASSWORD_RESET: timedelta(minutes=30),
    SecretTokenPurpose.EMAIL_RESET: timedelta(minutes=30),
}

_MESSAGES: Mapping[ErrorCode, str] = {
    ErrorCode.TOKEN_NOT_FOUND: CredentialErrorMessage.TOKEN_NOT_FOUND,
    ErrorCode.TOKEN_EXPIRED: CredentialErrorMessage.TOKEN_EXPIRED,
    ErrorCode.TOKEN_ALREADY_USED: CredentialErrorMessage.TOKEN_ALREADY_USED,
    ErrorCode.TOKEN_INVALID: CredentialErrorMessage.TOKEN_INVALID,
}


@dataclass(frozen=True, kw_only=True)
class IssuedSecretToken:
    """Token handed back to the caller after issue.

    Attributes:
        token: External token string to embed in a link.
        lookup_id: Public half of the token.
        purpose: Why the token was issued.
        expires_at: When the token stops being accepted.
    """

    token: str = field(repr=False)
    lookup_id: UUID
    purpose: SecretTokenPurpose
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class SecretTokenRedemption:
    """Result of a successful validation.

    Attributes:
        user_id: Holder of the redeemed token.
        purpose: Purpose the token was issued for.
        payload: Purpose-specific data stored at issue.
    """

    user_id: UUID
    purpose: SecretTokenPurpose
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def email_reset(self) -> EmailResetPayload:
        """Old/new address pair of an email-reset token.

        Raises:
            KeyError: If the token carries no email-reset payload.
        """
        return EmailResetPayload.from_dict(self.payload)


class SecretTokenManager:
    """Issue and redeem one-time secret tokens.

    Dependencies (injected via constructor):
        - CredentialStoreProtocol: Transactions over secret tokens
        - CredentialGeneratorProtocol: Secret and lookup id source
        - SecretHasherProtocol: Secret hashing (bcrypt)
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        store: CredentialStoreProtocol,
        generator: CredentialGeneratorProtocol,
        hasher: SecretHasherProtocol,
        logger: LoggerProtocol,
        *,
        ttls: Mapping[SecretTokenPurpose, timedelta] = DEFAULT_TOKEN_TTLS,
        max_conflict_retries: int = 5,
    ) -> None:
        """Initialize manager with dependencies.

        Args:
            store: Credential store.
            generator: Random material source.
            hasher: Secret hasher.
            logger: Structured logger.
            ttls: Default lifetime per purpose.
            max_conflict_retries: Retries on store contention.
        """
        self._store = store
        self._generator = generator
        self._hasher = hasher
        self._logger = logger
        self._ttls = dict(ttls)
        self._max_conflict_retries = max_conflict_retries

    async def issue(
        self,
        user_id: UUID,
        purpose: SecretTokenPurpose,
        ttl: timedelta | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> Result[IssuedSecretToken, DomainError]:
        """Issue a new token, superseding the holder's previous one.

        Args:
            user_id: Holder of the token.
            purpose: Token purpose.
            ttl: Lifetime override (default: per-purpose setting).
            payload: Purpose-specific data returned on redemption.

        Returns:
            Success(IssuedSecretToken): External token and metadata.
            Failure(ConflictError): CONFLICT after retries.
        """
        secret = self._generator.secret()
        lookup_id = self._generator.lookup_id()
        secret_hash = await self._in_executor(self._hasher.hash_secret, secret)
        lifetime = ttl if ttl is not None else self._ttls[purpose]
        stored_payload = dict(payload) if payload else None

        async def work(
            uow: CredentialUnitOfWork,
        ) -> Result[IssuedSecretToken, DomainError]:
            now = datetime.now(UTC)
            await uow.secret_tokens.supersede_unused(user_id, purpose, now)
            saved = await uow.secret_tokens.save(
                user_id=user_id,
                purpose=purpose,
                lookup_id=lookup_id,
                secret_hash=secret_hash,
                expires_at=now + lifetime,
                payload=stored_payload,
            )
            return Success(
                value=IssuedSecretToken(
                    token=ExternalToken(lookup_id=lookup_id, secret=secret).encode(),
                    lookup_id=lookup_id,
                    purpose=purpose,
                    expires_at=saved.expires_at,
                )
            )

        result = await self._run(work)
        if isinstance(result, Success):
            self._logger.info(
                "secret_token_issued",
                user_id=str(user_id),
                purpose=purpose.value,
                lookup_id=str(lookup_id),
            )
        return result

    async def validate(
        self,
        external_token: str,
        purpose: SecretTokenPurpose | None = None,
    ) -> Result[SecretTokenRedemption, DomainError]:
        """Redeem a token exactly once.

        Args:
            external_token: Token string produced by ``issue``.
            purpose: Expected purpose; a token of any other purpose is
                reported as not found.

        Returns:
            Success(SecretTokenRedemption): Holder and payload.
            Failure(SecretTokenError): TOKEN_INVALID, TOKEN_NOT_FOUND,
                TOKEN_ALREADY_USED or TOKEN_EXPIRED.
            Failure(ConflictError): CONFLICT after retries.
        """
        try:
            decoded = ExternalToken.decode(external_token)
        except ValueError:
            self._logger.warning(
                "secret_token_rejected",
                token=ExternalToken.redact(external_token),
                error_code=ErrorCode.TOKEN_INVALID.value,
            )
            return self._failure(ErrorCode.TOKEN_INVALID)

        async def load(
            uow: CredentialUnitOfWork,
        ) -> Result[SecretTokenData, DomainError]:
            record = await uow.secret_tokens.find_by_lookup_id(decoded.lookup_id)
            if record is None or (purpose is not None and record.purpose != purpose):
                return self._failure(ErrorCode.TOKEN_NOT_FOUND)
            if record.used:
                return self._failure(ErrorCode.TOKEN_ALREADY_USED, record.purpose)
            if record.is_expired(datetime.now(UTC)):
                return self._failure(ErrorCode.TOKEN_EXPIRED, record.purpose)
            return Success(value=record)

        result: Result[SecretTokenRedemption, DomainError]
        match await self._run(load):
            case Success(value=record):
                if await self._verify(decoded.secret, record.secret_hash):
                    result = await self._redeem(record)
                else:
                    result = self._failure(ErrorCode.TOKEN_INVALID, record.purpose)
            case Failure() as failure:
                result = failure

        match result:
            case Success(value=redemption):
                self._logger.info(
                    "secret_token_redeemed",
                    user_id=str(redemption.user_id),
                    purpose=redemption.purpose.value,
                    lookup_id=str(decoded.lookup_id),
                )
            case Failure(error=error):
                self._logger.warning(
                    "secret_token_rejected",
                    lookup_id=str(decoded.lookup_id),
                    error_code=error.code.value,
                )
        return result

    async def issue_password_reset(
        self, user_id: UUID
    ) -> Result[IssuedSecretToken, DomainError]:
        return await self.issue(user_id, SecretTokenPurpose.PASSWORD_RESET)

    async def issue_email_reset(
        self, user_id: UUID, old_email: str, new_email: str
    ) -> Result[IssuedSecretToken, DomainError]:
        """Issue an email-reset token carrying the old and new address."""
        payload = EmailResetPayload(old_email=old_email, new_email=new_email)
        return await self.issue(
            user_id, SecretTokenPurpose.EMAIL_RESET, payload=payload.to_dict()
        )

    async def validate_password_reset(
        self, external_token: str
    ) -> Result[SecretTokenRedemption, DomainError]:
        return await self.validate(external_token, SecretTokenPurpose.PASSWORD_RESET)

    async def validate_email_reset(
        self, external_token: str
    ) -> Result[SecretTokenRedemption, DomainError]:
        """Redeem an email-reset token.

        The caller should confirm ``redemption.email_reset.still_applies_to``
        against the user's current address before applying the change.
        """
        return await self.validate(external_token, SecretTokenPurpose.EMAIL_RESET)

    async def count_active(
        self, user_id: UUID, purpose: SecretTokenPurpose
    ) -> Result[int, DomainError]:
        """Number of unused tokens for a holder (diagnostics)."""

        async def work(uow: CredentialUnitOfWork) -> Result[int, DomainError]:
            return Success(value=await uow.secret_tokens.count_unused(user_id, purpose))

        return await self._run(work)

    async def _verify(self, secret: str, secret_hash: str) -> bool:
        return await self._in_executor(self._hasher.verify_secret, secret, secret_hash)

    async def _redeem(
        self, record: SecretTokenData
    ) -> Result[SecretTokenRedemption, DomainError]:
        """Re-read the verified token under a row lock and mark it used."""

        async def work(
            uow: CredentialUnitOfWork,
        ) -> Result[SecretTokenRedemption, DomainError]:
            now = datetime.now(UTC)
            current = await uow.secret_tokens.find_by_lookup_id(
                record.lookup_id, for_update=True
            )
            if current is None or current.used:
                return self._failure(ErrorCode.TOKEN_ALREADY_USED, record.purpose)
            if current.is_expired(now):
                return self._failure(ErrorCode.TOKEN_EXPIRED, record.purpose)
            if not await uow.secret_tokens.mark_used(record.id, now):
                return self._failure(ErrorCode.TOKEN_ALREADY_USED, record.purpose)
            return Success(
                value=SecretTokenRedemption(
                    user_id=record.user_id,
                    purpose=record.purpose,
                    payload=record.payload,
                )
            )

        return await self._run(work)

    @staticmethod
    async def _in_executor[T](func: Callable[..., T], *args: Any) -> T:
        """Run a blocking bcrypt call off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    def _failure(
        self, code: ErrorCode, purpose: SecretTokenPurpose | None = None
    ) -> Failure[SecretTokenError]:
        return Failure(
            error=SecretTokenError(
                code=code,
                message=_MESSAGES[code],
                purpose=purpose.value if purpose else None,
            )
        )

    async def _run[T](self, work: UnitOfWorkFn[T]) -> Result[T, DomainError]:
        return await run_in_transaction(
            self._store,
            work,
            resource_type="secret_token",
            max_retries=self._max_conflict_retries,
            logger=self._logger,
        )
