"""Infrastructure dependency factories.

Application-scoped singletons for infrastructure adapters:
- Logging (structlog console adapter)
- Database (PostgreSQL via asyncpg, SQLite via aiosqlite)
- Credential store (SQLAlchemy unit of work)
- Secret hashing (bcrypt)
- Random credential material (secrets)
- Notification delivery (stub/HTTP)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from credential_issuer.core.config import settings
from credential_issuer.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from credential_issuer.domain.protocols import (
        CredentialGeneratorProtocol,
        CredentialStoreProtocol,
        LoggerProtocol,
        NotificationProtocol,
        SecretHasherProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from credential_issuer.infrastructure.logging import ConsoleAdapter

    logger = ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )
    return logger.bind(app=settings.app_name, environment=settings.environment.value)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance owning the connection pool.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        isolation_level=settings.db_isolation_level,
    )


@lru_cache()
def get_credential_store() -> "CredentialStoreProtocol":
    """Get credential store singleton (app-scoped).

    Returns:
        SQLAlchemy credential store bound to the application database.
    """
    from credential_issuer.infrastructure.persistence import SQLAlchemyCredentialStore

    return SQLAlchemyCredentialStore(get_database())


@lru_cache()
def get_secret_hasher() -> "SecretHasherProtocol":
    """Get secret hasher singleton (bcrypt, cost from settings)."""
    from credential_issuer.infrastructure.security import BcryptSecretHasher

    return BcryptSecretHasher(rounds=settings.bcrypt_rounds)


@lru_cache()
def get_credential_generator() -> "CredentialGeneratorProtocol":
    """Get random credential material source singleton."""
    from credential_issuer.infrastructure.security import SecureCredentialGenerator

    return SecureCredentialGenerator()


@lru_cache()
def get_notification_dispatcher() -> "NotificationProtocol":
    """Get notification dispatcher singleton (app-scoped).

    Container owns factory logic - decides which adapter based on
    NOTIFICATION_BACKEND:
        - 'stub': StubNotificationDispatcher (logs, keeps in memory)
        - 'http': HttpNotificationDispatcher (notification service)

    Raises:
        ValueError: If the backend is unsupported, or 'http' is selected
            without NOTIFICATION_SERVICE_URL.
    """
    from credential_issuer.infrastructure.notifications import (
        HttpNotificationDispatcher,
        StubNotificationDispatcher,
    )

    backend = settings.notification_backend.lower()

    if backend == "http":
        if not settings.notification_service_url:
            raise ValueError("NOTIFICATION_SERVICE_URL is required for 'http' backend")
        return HttpNotificationDispatcher(
            base_url=settings.notification_service_url,
            endpoint=settings.notification_endpoint,
            service_token=settings.notification_service_token,
            timeout=settings.notification_timeout_seconds,
            logger=get_logger(),
        )

    elif backend == "stub":
        return StubNotificationDispatcher(logger=get_logger())

    else:
        raise ValueError(
            f"Unsupported NOTIFICATION_BACKEND: {backend}. Supported: 'stub', 'http'"
        )
