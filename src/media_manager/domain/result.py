"""Result pattern and domain error taxonomy.

Every operation on the Library, Catalog and Collection entities reports its
outcome as a Result instead of raising. A Failure always wraps a DomainError,
which carries the message shown to the user and a RecoveryHint telling an
interactive caller whether the rest of the current input line should be
thrown away.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar, cast

T = TypeVar('T')  # Success type
E = TypeVar('E', bound=Exception)  # Error type


class Result(ABC, Generic[T, E]):
    """Abstract base class for Result pattern.

    A Result represents either a successful operation with a value,
    or a failed operation with an error.
    """

    @abstractmethod
    def is_success(self) -> bool:
        """Check if the result is a success."""
        ...

    @abstractmethod
    def is_failure(self) -> bool:
        """Check if the result is a failure."""
        ...

    @abstractmethod
    def value(self) -> T:
        """Get the success value.

        Raises:
            ValueError: If the result is a failure.
        """
        ...

    @abstractmethod
    def error(self) -> E:
        """Get the error.

        Raises:
            ValueError: If the result is a success.
        """
        ...

    @abstractmethod
    def map(self, fn: Callable[[T], Any]) -> Result[Any, E]:
        """Map the success value through a function."""
        ...

    @abstractmethod
    def flat_map(self, fn: Callable[[T], Result[Any, E]]) -> Result[Any, E]:
        """Chain an operation that itself returns a Result."""
        ...

    @abstractmethod
    def map_error(self, fn: Callable[[E], Any]) -> Result[T, Any]:
        """Map the error through a function."""
        ...

    def or_else(self, default: T) -> T:
        """Get the success value or return a default."""
        return self.value() if self.is_success() else default

    def or_else_raise(self) -> T:
        """Get the success value or raise the error."""
        if self.is_failure():
            raise self.error()
        return self.value()

    def match(self, *, success: Callable[[T], Any] | None = None,
              failure: Callable[[E], Any] | None = None) -> Any:
        """Pattern match on the result."""
        if self.is_success() and success:
            return success(self.value())
        elif self.is_failure() and failure:
            return failure(self.error())
        return None


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """Represents a successful operation with a value."""
    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def value(self) -> T:
        return self._value

    def error(self) -> E:
        raise ValueError("Cannot get error from Success result")

    def map(self, fn: Callable[[T], Any]) -> Result[Any, E]:
        return Success(fn(self._value))

    def flat_map(self, fn: Callable[[T], Result[Any, E]]) -> Result[Any, E]:
        return fn(self._value)

    def map_error(self, fn: Callable[[E], Any]) -> Result[T, Any]:
        return self


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """Represents a failed operation with an error."""
    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def value(self) -> T:
        raise ValueError(f"Cannot get value from Failure result: {self._error}")

    def error(self) -> E:
        return self._error

    def map(self, fn: Callable[[T], Any]) -> Result[Any, E]:
        return self

    def flat_map(self, fn: Callable[[T], Result[Any, E]]) -> Result[Any, E]:
        return self

    def map_error(self, fn: Callable[[E], Any]) -> Result[T, Any]:
        return Failure(fn(self._error))


def success(value: T) -> Result[T, Any]:
    """Create a Success result."""
    return Success(value)


def failure(error: E) -> Result[Any, E]:
    """Create a Failure result."""
    return Failure(error)


def collect(results: list[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect a list of Results into a single Result.

    If all results are Success, returns Success with a list of all values.
    If any results are Failure, returns Failure with a list of all errors.
    """
    values = []
    errors = []

    for result in results:
        if result.is_success():
            values.append(result.value())
        else:
            errors.append(result.error())

    return Success(values) if not errors else Failure(errors)


def partition(results: list[Result[T, E]]) -> tuple[list[T], list[E]]:
    """Partition a list of Results into successes and failures."""
    successes = []
    failures = []

    for result in results:
        if result.is_success():
            successes.append(result.value())
        else:
            failures.append(result.error())

    return successes, failures


def try_catch(fn: Callable[[], T], error_class: type[E] | tuple[type[E], ...] = Exception) -> Result[T, E]:
    """Run fn and turn a raised error_class into a Failure.

    Args:
        fn: Function to execute
        error_class: Exception class(es) to catch

    Returns:
        Success(value) if no exception, Failure(exception) if caught
    """
    try:
        return Success(fn())
    except error_class as e:
        return Failure(cast(E, e))


class RecoveryHint(Enum):
    """What an interactive caller should do with its pending input after an error."""
    DISCARD_REST_OF_LINE = "discard_rest_of_line"
    KEEP_LINE = "keep_line"


class DomainError(Exception):
    """Base class for domain-specific errors."""

    default_recovery = RecoveryHint.DISCARD_REST_OF_LINE

    def __init__(self, message: str, recovery: RecoveryHint | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.recovery = recovery if recovery is not None else self.default_recovery

    @property
    def discard_rest_of_line(self) -> bool:
        return self.recovery is RecoveryHint.DISCARD_REST_OF_LINE

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, {self.recovery.name})"


class ValidationError(DomainError):
    """Raised when a value fails validation."""
    pass


class NotFoundError(DomainError):
    """A referenced record, collection, title or id does not exist."""
    pass


class DuplicateError(DomainError):
    """A new title or collection name collides with an existing one."""
    pass


class InUseError(DomainError):
    """Deletion is blocked by collections that still reference records."""
    pass


class RangeError(ValidationError):
    """A numeric value (a rating) is outside its valid domain."""
    pass


class AlreadyMemberError(DomainError):
    """The record is already a member of the collection."""
    pass


class NotMemberError(DomainError):
    """The record is not a member of the collection."""
    pass


class InvalidFormatError(ValidationError):
    """Persisted data is malformed; the whole restore is rejected."""
    pass


class StorageError(DomainError):
    """A save or restore target could not be opened or written."""
    pass


class InputError(ValidationError):
    """An interactive input token could not be parsed."""
    pass
