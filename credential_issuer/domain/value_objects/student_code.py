"""Student code value object."""

from dataclasses import dataclass

from credential_issuer.domain.value_objects.sub_pillar import SubPillar


@dataclass(frozen=True)
class StudentCode:
    """A student code issued from a sub-pillar.

    Attributes:
        number: Issued counter value (e.g. 560001).
        sub_pillar: Range the number was issued from.

    Example:
        >>> code = StudentCode(number=110001, sub_pillar=SubPillar(1, 1))
        >>> str(code)
        '110001'
    """

    number: int
    sub_pillar: SubPillar

    def __post_init__(self) -> None:
        if not self.sub_pillar.contains(self.number):
            raise ValueError(
                f"{self.number} is outside sub-pillar {self.sub_pillar.base}"
            )

    @property
    def value(self) -> str:
        """Fixed-width decimal form handed to callers."""
        return self.sub_pillar.format_code(self.number)

    def __str__(self) -> str:
        return self.value
