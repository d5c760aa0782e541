"""Shared doubles for application service unit tests."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from credential_issuer.domain.protocols import StoreConflict


class FakeCredentialStore:
    """Credential store double yielding one mocked unit of work.

    The first ``conflicts`` transactions raise StoreConflict, the way the
    SQLAlchemy store does when the database reports contention.
    """

    def __init__(self, uow, conflicts: int = 0) -> None:
        self.uow = uow
        self.conflicts = conflicts
        self.transactions = 0
        self.in_transaction = False

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        if self.transactions <= self.conflicts:
            raise StoreConflict("could not serialize access")
        self.in_transaction = True
        try:
            yield self.uow
        finally:
            self.in_transaction = False


@pytest.fixture
def uow():
    """Unit of work with AsyncMock repositories."""
    unit = MagicMock()
    unit.counters = AsyncMock()
    unit.verification_codes = AsyncMock()
    unit.secret_tokens = AsyncMock()
    return unit


@pytest.fixture
def fake_store(uow):
    return FakeCredentialStore(uow)


@pytest.fixture
def mock_generator():
    """Deterministic credential generator."""
    generator = MagicMock()
    generator.numeric_code.return_value = "042917"
    generator.secret.return_value = "raw-secret-value"
    generator.choice.side_effect = lambda options: options[0]
    return generator


@pytest.fixture
def conflicting_store(uow):
    """Factory for a store whose first transactions conflict."""

    def make(conflicts: int) -> FakeCredentialStore:
        return FakeCredentialStore(uow, conflicts=conflicts)

    return make
