"""Tests for the Result pattern and the domain error taxonomy."""

import pytest

from media_manager.domain.result import (
    AlreadyMemberError,
    DomainError,
    Failure,
    InputError,
    InvalidFormatError,
    NotFoundError,
    RangeError,
    RecoveryHint,
    Success,
    ValidationError,
    collect,
    failure,
    partition,
    success,
    try_catch,
)


class TestSuccess:
    """Test the Success result type."""

    def test_success_creation(self):
        """Test creating a Success result."""
        result = Success(42)
        assert result.is_success() is True
        assert result.is_failure() is False
        assert result.value() == 42

    def test_success_repr(self):
        """Test Success string representation."""
        assert repr(Success("test")) == "Success('test')"

    def test_success_error_raises(self):
        """Test that accessing error on Success raises."""
        with pytest.raises(ValueError, match="Cannot get error from Success result"):
            Success(42).error()

    def test_success_map(self):
        """Test mapping over Success."""
        assert Success(5).map(lambda x: x * 2).value() == 10

    def test_success_flat_map_to_failure(self):
        """Test flat mapping from Success to Failure."""
        error = NotFoundError("gone")
        result = Success(5).flat_map(lambda _: failure(error))
        assert isinstance(result, Failure)
        assert result.error() is error

    def test_success_or_else_raise(self):
        assert Success(3).or_else_raise() == 3


class TestFailure:
    """Test the Failure result type."""

    def test_failure_value_raises(self):
        """Test that accessing value on Failure raises."""
        result = Failure(NotFoundError("No record with that ID!"))
        with pytest.raises(ValueError, match="Cannot get value from Failure result"):
            result.value()

    def test_failure_short_circuits(self):
        """map and flat_map never call their function on a Failure."""
        calls = []
        result = Failure(NotFoundError("missing"))
        result.map(calls.append)
        result.flat_map(calls.append)
        assert calls == []

    def test_failure_or_else(self):
        assert Failure(NotFoundError("missing")).or_else(7) == 7

    def test_failure_or_else_raise(self):
        with pytest.raises(NotFoundError, match="missing"):
            Failure(NotFoundError("missing")).or_else_raise()

    def test_map_error(self):
        result = Failure(NotFoundError("missing")).map_error(lambda e: InvalidFormatError(str(e)))
        assert isinstance(result.error(), InvalidFormatError)


class TestHelpers:
    """Test module-level helpers."""

    def test_match(self):
        assert success(2).match(success=lambda v: v + 1, failure=lambda e: -1) == 3
        assert failure(NotFoundError("x")).match(success=lambda v: v, failure=lambda e: -1) == -1

    def test_collect_all_success(self):
        assert collect([success(1), success(2)]).value() == [1, 2]

    def test_collect_with_failures(self):
        first, second = NotFoundError("a"), RangeError("b")
        result = collect([success(1), failure(first), failure(second)])
        assert result.error() == [first, second]

    def test_partition(self):
        error = NotFoundError("a")
        values, errors = partition([success(1), failure(error), success(3)])
        assert values == [1, 3]
        assert errors == [error]

    def test_try_catch_catches_listed_error(self):
        def boom():
            raise InvalidFormatError("Invalid data found in file!")

        result = try_catch(boom, InvalidFormatError)
        assert result.is_failure()
        assert str(result.error()) == "Invalid data found in file!"

    def test_try_catch_lets_other_errors_through(self):
        def boom():
            raise KeyError("unexpected")

        with pytest.raises(KeyError):
            try_catch(boom, InvalidFormatError)


class TestDomainErrors:
    """Test error messages and recovery hints."""

    def test_default_hint_discards_line(self):
        error = NotFoundError("No record with that ID!")
        assert error.recovery is RecoveryHint.DISCARD_REST_OF_LINE
        assert error.discard_rest_of_line is True

    def test_explicit_keep_line(self):
        error = NotFoundError("No record with that title!", RecoveryHint.KEEP_LINE)
        assert error.discard_rest_of_line is False
        assert str(error) == "No record with that title!"
        assert error.message == "No record with that title!"

    def test_hierarchy(self):
        assert issubclass(RangeError, ValidationError)
        assert issubclass(InvalidFormatError, ValidationError)
        assert issubclass(InputError, ValidationError)
        assert issubclass(AlreadyMemberError, DomainError)
        assert issubclass(DomainError, Exception)

    def test_repr_names_hint(self):
        assert repr(RangeError("Rating is out of range!")) == (
            "RangeError('Rating is out of range!', DISCARD_REST_OF_LINE)"
        )
