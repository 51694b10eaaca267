"""Shared domain building blocks.

- Result type for explicit error handling
- Base domain event

Example usage:
    >>> from atomize.domain.shared import Ok, Err, Result
    >>>
    >>> def require_title(title: str) -> Result[str, str]:
    ...     if not title.strip():
    ...         return Err("Title cannot be empty")
    ...     return Ok(title.strip())
"""

from atomize.domain.shared.events import DomainEvent
from atomize.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_err,
    is_ok,
    map_result,
    unwrap_or,
)

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "map_result",
    "unwrap_or",
    # Events
    "DomainEvent",
]
