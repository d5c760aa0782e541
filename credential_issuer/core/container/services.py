"""Application service factories.

Each service is an application-scoped singleton wired from the
infrastructure factories and settings.
"""

from datetime import timedelta
from functools import lru_cache

from credential_issuer.application.services import (
    CodeAllocator,
    SecretTokenManager,
    StudentCodeGenerator,
    VerificationCodeManager,
)
from credential_issuer.core.config import settings
from credential_issuer.core.container.infrastructure import (
    get_credential_generator,
    get_credential_store,
    get_logger,
    get_notification_dispatcher,
    get_secret_hasher,
)
from credential_issuer.domain.enums import SecretTokenPurpose, VerificationPurpose


def minutes(value: int) -> timedelta:
    return timedelta(minutes=value)


@lru_cache()
def get_code_allocator() -> CodeAllocator:
    return CodeAllocator(
        get_credential_store(),
        get_logger(),
        max_conflict_retries=settings.store_conflict_max_retries,
    )


@lru_cache()
def get_student_code_generator() -> StudentCodeGenerator:
    """Random sub-pillar student code generator (failover per settings)."""
    return StudentCodeGenerator(
        get_code_allocator(),
        get_credential_generator(),
        get_logger(),
        failover_enabled=settings.student_code_failover_enabled,
        max_attempts=settings.student_code_max_attempts,
    )


@lru_cache()
def get_verification_code_manager() -> VerificationCodeManager:
    return VerificationCodeManager(
        get_credential_store(),
        get_credential_generator(),
        get_notification_dispatcher(),
        get_logger(),
        code_length=settings.verification_code_length,
        ttls={
            VerificationPurpose.REGISTRATION: minutes(
                settings.registration_code_ttl_minutes
            ),
            VerificationPurpose.EMAIL_CHANGE: minutes(
                settings.email_change_code_ttl_minutes
            ),
        },
        max_attempts=settings.verification_code_max_attempts,
        max_conflict_retries=settings.store_conflict_max_retries,
    )


@lru_cache()
def get_secret_token_manager() -> SecretTokenManager:
    return SecretTokenManager(
        get_credential_store(),
        get_credential_generator(),
        get_secret_hasher(),
        get_logger(),
        ttls={
            SecretTokenPurpose.PASSWORD_RESET: minutes(
                settings.password_reset_token_ttl_minutes
            ),
            SecretTokenPurpose.EMAIL_RESET: minutes(
                settings.email_reset_token_ttl_minutes
            ),
        },
        max_conflict_retries=settings.store_conflict_max_retries,
    )
