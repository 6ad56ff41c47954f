"""
Unit tests for Result<T> pattern and the error taxonomy.
"""

import pytest

from lab_checkout.models.errors import (
    CheckoutError,
    ConflictError,
    ErrorKind,
    NotFoundError,
    PolicyError,
    SecurityError,
    ValidationError,
)
from lab_checkout.models.result import Result, ResultStatus


class TestResult:
    """Test cases for Result class."""

    def test_success_creation(self):
        """Test creating a successful result."""
        result = Result.success("RECEIPT-20250101-LAB-101-KRG11771", "done")

        assert result.is_success
        assert not result.is_failure
        assert result.status == ResultStatus.SUCCESS
        assert result.value == "RECEIPT-20250101-LAB-101-KRG11771"
        assert result.message == "done"
        assert result.error is None
        assert result.kind is None

    def test_failure_from_error(self):
        """Test failure created from a checkout error carries its kind."""
        error = NotFoundError("Student record not located.")
        result = Result.from_error(error)

        assert result.is_failure
        assert result.status == ResultStatus.FAILURE
        assert result.value is None
        assert result.message == "Student record not located."
        assert result.error is error
        assert result.kind == ErrorKind.MISSING_ENTITY

    def test_failure_with_plain_exception_has_no_kind(self):
        """Test failure wrapping a non-checkout exception."""
        result = Result.failure("boom", RuntimeError("boom"))

        assert result.is_failure
        assert result.kind is None

    def test_unwrap_success(self):
        """Test unwrapping successful result."""
        assert Result.success(3).unwrap() == 3

    def test_unwrap_failure_raises(self):
        """Test unwrapping failure raises exception."""
        result = Result.from_error(ValidationError("bad uid"))

        with pytest.raises(ValueError, match="Cannot unwrap failure result"):
            result.unwrap()

    def test_map_success(self):
        """Test mapping over successful result."""
        mapped = Result.success(1).map(lambda count: count + 1)

        assert mapped.is_success
        assert mapped.value == 2

    def test_map_failure_keeps_error(self):
        """Test mapping over failure keeps the original error."""
        error = PolicyError("Maximum borrowing capacity reached.", ErrorKind.CAPACITY_REACHED)
        mapped = Result.from_error(error).map(lambda _: None)

        assert mapped.is_failure
        assert mapped.error is error
        assert mapped.kind == ErrorKind.CAPACITY_REACHED

    def test_map_with_exception(self):
        """Test mapping with function that raises exception."""
        mapped = Result.success(5).map(lambda x: 1 / 0)

        assert mapped.is_failure
        assert isinstance(mapped.error, ZeroDivisionError)


class TestErrorKinds:
    """Test cases for the error taxonomy."""

    @pytest.mark.parametrize("kind, category", [
        (ErrorKind.MALFORMED_INPUT, "malformed-input"),
        (ErrorKind.MISSING_ENTITY, "missing-entity"),
        (ErrorKind.OUTSTANDING_FINE, "policy-violation"),
        (ErrorKind.CAPACITY_REACHED, "policy-violation"),
        (ErrorKind.UNAVAILABLE, "unavailable"),
        (ErrorKind.ALREADY_BORROWED, "unavailable"),
        (ErrorKind.CLEARANCE_REQUIRED, "clearance-required"),
    ])
    def test_category(self, kind, category):
        assert kind.category == category

    def test_default_kinds(self):
        """Test each error class has a sensible default kind."""
        assert ValidationError("x").kind == ErrorKind.MALFORMED_INPUT
        assert NotFoundError("x").kind == ErrorKind.MISSING_ENTITY
        assert ConflictError("x").kind == ErrorKind.UNAVAILABLE
        assert SecurityError("x").kind == ErrorKind.CLEARANCE_REQUIRED

    def test_explicit_kind_overrides_default(self):
        error = ConflictError("Asset already allocated.", ErrorKind.ALREADY_BORROWED)

        assert error.kind == ErrorKind.ALREADY_BORROWED
        assert error.category == "unavailable"
        assert isinstance(error, CheckoutError)
        assert error.stage is None
        assert str(error) == "Asset already allocated."
