"""Ok/Err result values.

Operations that talk to npm, git or GitHub fail for ordinary reasons (missing
tag, unreachable host, bad input). They return a ``Result`` instead of raising,
so every call site decides explicitly what a failure means for it.

Usage:
    match registry.published_versions():
        case Ok(versions):
            ...
        case Err(error):
            console.warning(str(error))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = ["Err", "Ok", "Result"]

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Description of the failure.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]
