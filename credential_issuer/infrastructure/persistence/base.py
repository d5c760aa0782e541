"""Declarative base and mixins for credential tables.

This module provides:
- Base: Declarative base holding the shared metadata
- BaseModel: Base class for credential rows (provides id, created_at)
- TimestampMixin: Adds updated_at to rows that are modified in place

Following hexagonal architecture:
- This is an infrastructure concern (database implementation detail)
- Domain code never sees these classes, only the DTOs repositories return

Architecture:
    Base (metadata)
        ├── BaseModel (id, created_at)
        │   ├── VerificationCode
        │   └── SecretToken
        │
        └── SubPillarCounter (+ updated_at via TimestampMixin, natural key)
"""

from datetime import UTC, datetime
from uuid import UUID as PythonUUID, uuid4

from sqlalchemy import Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from credential_issuer.infrastructure.persistence.types import UTCDateTime


def utc_now() -> datetime:
    """Current time in UTC, used for Python-side column defaults."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base; ``Base.metadata`` is what Alembic and create_all use."""


class BaseModel(Base):
    """Base class for credential rows keyed by a surrogate UUID.

    Provides:
        - id: UUID primary key (generated client-side)
        - created_at: Creation timestamp (UTC), also the ordering key for
          "latest" queries (ties broken by id)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """Mixin for rows that track creation and last modification."""

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )
