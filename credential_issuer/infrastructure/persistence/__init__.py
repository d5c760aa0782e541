"""Persistence adapters (SQLAlchemy async).

Usage:
    from credential_issuer.infrastructure.persistence import (
        Database,
        SQLAlchemyCredentialStore,
    )
"""

from credential_issuer.infrastructure.persistence.credential_store import (
    SQLAlchemyCredentialStore,
    SQLAlchemyUnitOfWork,
)
from credential_issuer.infrastructure.persistence.database import Database

__all__ = [
    "Database",
    "SQLAlchemyCredentialStore",
    "SQLAlchemyUnitOfWork",
]
