"""create_credential_tables

Revision ID: 6b1f3c2a9d40
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "6b1f3c2a9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create sub_pillar_counters, verification_codes and secret_tokens."""
    op.create_table(
        "sub_pillar_counters",
        sa.Column(
            "sub_pillar_base",
            sa.Integer(),
            autoincrement=False,
            nullable=False,
            comment="Sub-pillar base (main digit * 100000 + sub digit * 10000)",
        ),
        sa.Column(
            "last_issued_number",
            sa.Integer(),
            nullable=False,
            comment="Last student code number issued from this sub-pillar",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "last_issued_number >= sub_pillar_base "
            "AND last_issued_number < sub_pillar_base + 10000",
            name="ck_sub_pillar_counters_range",
        ),
        sa.PrimaryKeyConstraint("sub_pillar_base"),
    )

    op.create_table(
        "verification_codes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="User the code was issued to",
        ),
        sa.Column(
            "code",
            sa.String(length=10),
            nullable=False,
            comment="Numeric verification code",
        ),
        sa.Column(
            "purpose",
            sa.String(length=32),
            nullable=False,
            comment="Verification purpose (REGISTRATION, EMAIL_CHANGE)",
        ),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Timestamp when code expires",
        ),
        sa.Column(
            "retry_count",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="Failed validation attempts",
        ),
        sa.Column(
            "consumed_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Timestamp when code was consumed, superseded or locked out",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_verification_codes_holder",
        "verification_codes",
        ["user_id", "purpose", "created_at"],
    )

    op.create_table(
        "secret_tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="User the token was issued to",
        ),
        sa.Column(
            "purpose",
            sa.String(length=32),
            nullable=False,
            comment="Token purpose (PASSWORD_RESET, EMAIL_RESET)",
        ),
        sa.Column(
            "lookup_id",
            sa.Uuid(),
            nullable=False,
            comment="Public lookup half of the external token",
        ),
        sa.Column(
            "secret_hash",
            sa.String(length=255),
            nullable=False,
            comment="bcrypt hash of the secret half",
        ),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Timestamp when token expires",
        ),
        sa.Column(
            "used",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
            comment="One-time use flag",
        ),
        sa.Column(
            "used_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Timestamp when token was used or superseded",
        ),
        sa.Column(
            "payload",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
            comment="Purpose-specific payload",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ux_secret_tokens_lookup_id",
        "secret_tokens",
        ["lookup_id"],
        unique=True,
    )
    # At most one unused token per holder and purpose
    op.create_index(
        "ux_secret_tokens_active_holder",
        "secret_tokens",
        ["user_id", "purpose"],
        unique=True,
        postgresql_where=sa.text("used = false"),
        sqlite_where=sa.text("used = 0"),
    )


def downgrade() -> None:
    """Drop credential tables."""
    op.drop_index("ux_secret_tokens_active_holder", table_name="secret_tokens")
    op.drop_index("ux_secret_tokens_lookup_id", table_name="secret_tokens")
    op.drop_table("secret_tokens")
    op.drop_index("ix_verification_codes_holder", table_name="verification_codes")
    op.drop_table("verification_codes")
    op.drop_table("sub_pillar_counters")
