"""SubPillarCounterRepository protocol (port).

One counter row per sub-pillar holds the last number issued from it.
Rows are created lazily on first allocation and never deleted.
"""

from typing import Protocol

from credential_issuer.domain.value_objects import SubPillar


class SubPillarCounterRepository(Protocol):
    """Protocol for sub-pillar counter persistence.

    Implementations:
        - SubPillarCounterRepository (SQLAlchemy): credential_issuer/infrastructure/persistence/repositories/
    """

    async def increment(self, sub_pillar: SubPillar) -> int | None:
        """Atomically issue the next number from a sub-pillar.

        Creates the counter row when it does not exist yet, so the first
        call returns ``sub_pillar.first_code``. Runs as a single
        read-modify-write statement; concurrent callers on the same
        sub-pillar never receive the same number.

        Args:
            sub_pillar: Slot to allocate from.

        Returns:
            The newly issued number, or None if the sub-pillar is exhausted
            (counter left unchanged).
        """
        ...

    async def get_last_issued(self, sub_pillar: SubPillar) -> int | None:
        """Return the counter value, or None if nothing was ever issued."""
        ...
