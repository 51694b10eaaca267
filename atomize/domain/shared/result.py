"""Result type for operations that can fail in an expected way.

Validation failures, storage problems and external-service errors are
returned as values instead of raised, so callers decide how to degrade.

Example usage:
    >>> def parse_weight(raw: str) -> Result[int, str]:
    ...     if not raw.isdigit():
    ...         return Err(f"Not a number: {raw}")
    ...     return Ok(int(raw))
    ...
    >>> unwrap_or(parse_weight("x"), 1)
    1
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying an error, usually a user-facing message."""

    error: E


# Union rather than | because TypeVar aliases must work at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Ok."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Err."""
    return isinstance(result, Err)


def map_result(result: Ok[T] | Err[E], fn: Callable[[T], U]) -> Ok[U] | Err[E]:
    """Transform the value of an Ok result, passing Err through untouched.

    Args:
        result: The result to transform.
        fn: Function applied to the Ok value.

    Returns:
        Ok(fn(value)) or the original Err.
    """
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Return the Ok value, or the default when the result is an Err."""
    if isinstance(result, Ok):
        return result.value
    return default
