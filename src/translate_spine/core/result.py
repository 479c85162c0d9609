"""
Result envelope for consistent success/failure handling.

Engine entry points return ``Ok[T]`` for success or ``Err[T]`` for an
expected failure instead of raising, so the caller decides whether a typed
failure is terminal. Provider outcomes use the same envelope: a provider's
answer is ``Ok(text)`` or ``Err(ProviderError)``.

Callers branch with structural pattern matching:

Examples:
    >>> from translate_spine.core.result import Ok, Err
    >>> match Ok("Bonjour"):
    ...     case Ok(text):
    ...         print(text)
    ...     case Err(error):
    ...         print(error)
    Bonjour
    >>> Err(ValueError("oops")).unwrap_or("fallback")
    'fallback'

Tags:
    result-pattern, error-handling, translate-spine
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result containing an error."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


__all__ = ["Ok", "Err", "Result"]
