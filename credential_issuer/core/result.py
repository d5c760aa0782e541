"""Result types for railway-oriented programming.

Every credential operation can fail for ordinary business reasons (expired
code, exhausted sub-pillar, reused token). Those outcomes are returned as
values instead of raised, so callers are forced to handle them.

Usage:
    result = await allocator.allocate_next(560000)
    match result:
        case Success(value=code):
            print(f"Issued student code {code}")
        case Failure(error=error):
            print(f"Allocation failed: {error.code.value}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
