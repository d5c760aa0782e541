"""Pytest configuration for credential issuer tests.

This configuration ensures:
1. Settings load without a real database (environment set before imports)
2. Every integration test gets its own SQLite database file
3. Logging is mocked; tests assert on event names instead of output
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

from collections.abc import AsyncIterator  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from credential_issuer.infrastructure.notifications import (  # noqa: E402
    StubNotificationDispatcher,
)
from credential_issuer.infrastructure.persistence import (  # noqa: E402
    Database,
    SQLAlchemyCredentialStore,
)
from credential_issuer.infrastructure.security import (  # noqa: E402
    BcryptSecretHasher,
    SecureCredentialGenerator,
)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )


@pytest.fixture
def mock_logger():
    """Logger double satisfying LoggerProtocol."""
    return MagicMock()


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncIterator[Database]:
    """Fresh SQLite database with all credential tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'credentials.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def store(database):
    """Credential store over the per-test database."""
    return SQLAlchemyCredentialStore(database)


@pytest.fixture
def hasher():
    """bcrypt hasher at the minimum cost factor."""
    return BcryptSecretHasher(rounds=4)


@pytest.fixture
def generator():
    """Real random source."""
    return SecureCredentialGenerator()


@pytest.fixture
def dispatcher(mock_logger):
    """In-memory notification dispatcher."""
    return StubNotificationDispatcher(logger=mock_logger)
