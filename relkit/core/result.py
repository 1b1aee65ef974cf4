"""Result type for explicit error propagation.

Every fallible operation in relkit returns ``Ok(value)`` or ``Err(error)``
instead of raising. Callers check with ``isinstance`` and return early:

    sha = resolve_ref(hosting, "release/v1.15")
    if isinstance(sha, Err):
        return sha
    print(sha.value)

or with pattern matching:

    match find_commit(hosting, branch="main", pattern="(#42)"):
        case Ok(commit):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeGuard, TypeVar

__all__ = ["Err", "Ok", "Result", "is_err", "is_ok"]

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the carried value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raise, since there is no value.

        Raises:
            ValueError: Always, with the carried error in the message.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def map(self, f: Callable[[object], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Type guard narrowing ``result`` to ``Ok``."""
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Type guard narrowing ``result`` to ``Err``."""
    return isinstance(result, Err)
