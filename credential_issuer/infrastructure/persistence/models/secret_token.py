"""Secret token database model.

Security:
    - lookup_id: random UUID, indexed, safe to log
    - secret_hash: bcrypt hash of the secret half; the raw secret is never stored
    - used: one-time use flag, set by redemption or supersession
    - Partial unique index keeps at most one unused token per holder/purpose
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, Index, String, Uuid, false, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from credential_issuer.infrastructure.persistence.base import BaseModel
from credential_issuer.infrastructure.persistence.types import UTCDateTime


class SecretToken(BaseModel):
    """Opaque one-time secret token (password reset, email reset).

    Token Lifecycle:
        1. Created on issue; previous unused token of the holder/purpose
           is superseded in the same transaction
        2. Looked up by lookup_id, secret verified against secret_hash
        3. Marked used exactly once
        4. Rows are kept after use

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Timestamp when token issued (from BaseModel)
        user_id: Holder of the token
        purpose: SecretTokenPurpose value
        lookup_id: Public half of the external token
        secret_hash: bcrypt hash of the secret half
        expires_at: Timestamp when token stops being accepted
        used: One-time use flag
        used_at: Timestamp when token was used or superseded
        payload: Purpose-specific data (old/new email for email reset)

    Indexes:
        - ux_secret_tokens_lookup_id: (lookup_id) unique
        - ux_secret_tokens_active_holder: (user_id, purpose) unique WHERE NOT used
    """

    __tablename__ = "secret_tokens"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="User the token was issued to",
    )

    purpose: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Token purpose (PASSWORD_RESET, EMAIL_RESET)",
    )

    lookup_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="Public lookup half of the external token",
    )

    secret_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the secret half",
    )

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        comment="Timestamp when token expires",
    )

    used: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="One-time use flag",
    )

    used_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
        default=None,
        comment="Timestamp when token was used or superseded",
    )

    payload: Mapped[dict[str, Any] | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
        comment="Purpose-specific payload",
    )

    __table_args__ = (
        Index("ux_secret_tokens_lookup_id", "lookup_id", unique=True),
        Index(
            "ux_secret_tokens_active_holder",
            "user_id",
            "purpose",
            unique=True,
            postgresql_where=text("used = false"),
            sqlite_where=text("used = 0"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<SecretToken("
            f"id={self.id}, "
            f"user_id={self.user_id}, "
            f"purpose={self.purpose}, "
            f"used={self.used}"
            f")>"
        )
