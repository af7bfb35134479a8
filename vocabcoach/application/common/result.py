"""
Result type for tracker and service outcomes.

Persistence failures in the tracker are values, not exceptions: the caller
gets a Failure it can inspect while the in-memory session keeps its state.

Example:
    result = tracker.complete_multiple_choice_section()
    if result.is_success:
        logger.info("responses_flushed", count=result.unwrap())
    else:
        logger.warning("responses_not_flushed", error=str(result.unwrap_error()))
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


@dataclass(frozen=True)
class Success(Generic[T]):
    """A completed operation and its value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> None:
        raise ValueError("Success result carries no error")

    def value_or(self, default: T) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A failed operation and the error describing it."""

    error: E

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> None:
        raise ValueError(f"Failure result carries no value: {self.error!r}")

    def unwrap_error(self) -> E:
        return self.error

    def value_or(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


Result = Success[T] | Failure[E]
