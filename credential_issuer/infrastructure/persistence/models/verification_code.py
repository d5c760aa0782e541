"""Verification code database model.

Security:
    - code: short numeric code delivered out of band (6 digits by default)
    - expires_at: a few minutes after issue
    - retry_count: failed submissions against this code
    - consumed_at: set on success, on supersession by a resend, or on lock-out
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from credential_issuer.infrastructure.persistence.base import BaseModel
from credential_issuer.infrastructure.persistence.types import UTCDateTime


class VerificationCode(BaseModel):
    """Short-lived numeric verification code.

    Code Lifecycle:
        1. Created by issue or resend (ACTIVE: not consumed, not expired)
        2. Failed submissions increment retry_count
        3. consumed_at set once, never cleared
        4. Rows are kept after they stop being active

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Timestamp when code issued (from BaseModel)
        user_id: Holder of the code (owned by the calling service)
        code: Numeric code
        purpose: VerificationPurpose value
        expires_at: Timestamp when code stops being accepted
        retry_count: Number of failed submissions
        consumed_at: Timestamp when code stopped being active (nullable)

    Indexes:
        - ix_verification_codes_holder: (user_id, purpose, created_at)
    """

    __tablename__ = "verification_codes"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="User the code was issued to",
    )

    code: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        comment="Numeric verification code",
    )

    purpose: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Verification purpose (REGISTRATION, EMAIL_CHANGE)",
    )

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        comment="Timestamp when code expires",
    )

    retry_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Failed validation attempts",
    )

    consumed_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
        default=None,
        comment="Timestamp when code was consumed, superseded or locked out",
    )

    __table_args__ = (
        Index("ix_verification_codes_holder", "user_id", "purpose", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<VerificationCode("
            f"id={self.id}, "
            f"user_id={self.user_id}, "
            f"purpose={self.purpose}, "
            f"retry_count={self.retry_count}, "
            f"consumed={self.consumed_at is not None}"
            f")>"
        )
