"""Result types for railway-oriented programming.

Provider calls, token refreshes and model attempts can all fail in expected
ways. Those failures travel as values instead of exceptions so that callers
decide explicitly whether to fall back, skip or surface them.

Usage:
    def parse_amount(raw: str) -> Result[Decimal, str]:
        if not raw:
            return Failure(error="Empty amount")
        return Success(value=Decimal(raw))

    match parse_amount("10.50"):
        case Success(value=amount):
            print(f"Amount: {amount}")
        case Failure(error=error):
            print(f"Error: {error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
