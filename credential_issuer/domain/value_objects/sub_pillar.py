"""Sub-pillar value object.

Student codes are six-digit numbers partitioned into 81 fixed ranges. The
leading digit (1-9) selects a main pillar, the second digit (1-9) a
sub-pillar, and the remaining four digits are issued sequentially:

    main digit 5, sub digit 6  ->  base 560000, codes 560001..569999

Each SubPillar is an addressable slot in that arena. The counter row for a
slot stores the last issued number, which always stays inside
``[base, base + SUB_PILLAR_WIDTH - 1]``.
"""

from dataclasses import dataclass

from credential_issuer.core.constants import (
    MAIN_PILLAR_DIGITS,
    MAIN_PILLAR_SIZE,
    STUDENT_CODE_WIDTH,
    SUB_PILLAR_DIGITS,
    SUB_PILLAR_WIDTH,
)


@dataclass(frozen=True, order=True)
class SubPillar:
    """One of the 81 fixed student-code ranges.

    Attributes:
        main_digit: Leading digit of every code in the range (1-9).
        sub_digit: Second digit of every code in the range (1-9).

    Raises:
        ValueError: If either digit is out of range.

    Example:
        >>> pillar = SubPillar.from_base(560000)
        >>> pillar.first_code, pillar.last_code
        (560001, 569999)
        >>> pillar.format_code(560001)
        '560001'
    """

    main_digit: int
    sub_digit: int

    def __post_init__(self) -> None:
        """Validate digit ranges.

        Raises:
            ValueError: If a digit is outside its range.
        """
        if self.main_digit not in MAIN_PILLAR_DIGITS:
            raise ValueError(f"Main pillar digit must be 1-9, got {self.main_digit}")
        if self.sub_digit not in SUB_PILLAR_DIGITS:
            raise ValueError(f"Sub-pillar digit must be 1-9, got {self.sub_digit}")

    @classmethod
    def from_base(cls, base: int) -> "SubPillar":
        """Build a sub-pillar from its base value.

        Args:
            base: Base value such as 560000.

        Returns:
            SubPillar: The matching slot.

        Raises:
            ValueError: If ``base`` is not one of the 81 valid bases.
        """
        if base % SUB_PILLAR_WIDTH != 0:
            raise ValueError(f"Invalid sub-pillar base: {base}")
        main_digit, remainder = divmod(base, MAIN_PILLAR_SIZE)
        try:
            return cls(main_digit=main_digit, sub_digit=remainder // SUB_PILLAR_WIDTH)
        except ValueError as e:
            raise ValueError(f"Invalid sub-pillar base: {base}") from e

    @classmethod
    def all(cls) -> list["SubPillar"]:
        """Return all 81 sub-pillars in ascending base order."""
        return [
            cls(main_digit=main, sub_digit=sub)
            for main in MAIN_PILLAR_DIGITS
            for sub in SUB_PILLAR_DIGITS
        ]

    @property
    def base(self) -> int:
        """Base value of the range (also the counter's initial value)."""
        return self.main_digit * MAIN_PILLAR_SIZE + self.sub_digit * SUB_PILLAR_WIDTH

    @property
    def first_code(self) -> int:
        """First number handed out from this sub-pillar."""
        return self.base + 1

    @property
    def last_code(self) -> int:
        """Last number this sub-pillar can hand out."""
        return self.base + SUB_PILLAR_WIDTH - 1

    def contains(self, number: int) -> bool:
        """Check whether a number lies inside this sub-pillar's range."""
        return self.base <= number <= self.last_code

    def format_code(self, number: int) -> str:
        """Format an issued number as a fixed-width student code.

        Raises:
            ValueError: If ``number`` is outside the sub-pillar.
        """
        if not self.contains(number):
            raise ValueError(f"{number} is outside sub-pillar {self.base}")
        return str(number).zfill(STUDENT_CODE_WIDTH)

    def __str__(self) -> str:
        return str(self.base)
