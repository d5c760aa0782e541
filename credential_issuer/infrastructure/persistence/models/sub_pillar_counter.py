"""Sub-pillar counter model for student code allocation.

One row per sub-pillar, keyed by the sub-pillar base. The row is created by
the first allocation and updated in place by every later one.
"""

from sqlalchemy import CheckConstraint, Integer
from sqlalchemy.orm import Mapped, mapped_column

from credential_issuer.infrastructure.persistence.base import Base, TimestampMixin


class SubPillarCounter(TimestampMixin, Base):
    """Last number issued from one sub-pillar.

    Fields:
        sub_pillar_base: Base of the sub-pillar (primary key, e.g. 560000)
        last_issued_number: Most recent code issued (base+1 .. base+9999; base itself
            means nothing issued yet)
        created_at: First allocation from this sub-pillar
        updated_at: Most recent allocation

    Constraints:
        - ck_sub_pillar_counters_range: counter never leaves its sub-pillar
    """

    __tablename__ = "sub_pillar_counters"

    sub_pillar_base: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Sub-pillar base (main digit * 100000 + sub digit * 10000)",
    )

    last_issued_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Last student code number issued from this sub-pillar",
    )

    __table_args__ = (
        CheckConstraint(
            "last_issued_number >= sub_pillar_base "
            "AND last_issued_number < sub_pillar_base + 10000",
            name="ck_sub_pillar_counters_range",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<SubPillarCounter("
            f"base={self.sub_pillar_base}, "
            f"last_issued={self.last_issued_number}"
            f")>"
        )
