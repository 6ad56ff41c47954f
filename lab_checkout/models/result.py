"""
Result<T> pattern for checkout outcomes.

Every step of the checkout pipeline returns a Result instead of raising,
so a caller can keep going after one rejected request without catching
exception types. A failed Result carries a CheckoutError whose kind
tags the reason.
"""

from dataclasses import dataclass
from typing import Optional, Generic, TypeVar, Callable
from enum import Enum

from .errors import CheckoutError, ErrorKind


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Wrapper for pipeline steps that may succeed or fail.

    Attributes:
        status: Result status (SUCCESS or FAILURE)
        value: The result value if successful (None if failure)
        error: The error value describing the failure (None if success)
        message: Optional message describing the result

    Examples:
        >>> result = Result.success("RECEIPT-20250101-LAB-101-KRG11771")
        >>> result.is_success
        True

        >>> error = NotFoundError("Student record not located.")
        >>> result = Result.failure(error.message, error)
        >>> result.kind
        <ErrorKind.MISSING_ENTITY: 'missing-entity'>
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @property
    def kind(self) -> Optional[ErrorKind]:
        """
        Get the tagged error kind of a failure.

        Returns:
            ErrorKind if the failure carries a CheckoutError, otherwise None
        """
        if isinstance(self.error, CheckoutError):
            return self.error.kind
        return None

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            value: The result value
            message: Optional success message

        Returns:
            Result instance with SUCCESS status
        """
        return cls(
            status=ResultStatus.SUCCESS,
            value=value,
            message=message
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: Error message describing the failure
            error: Optional error value (usually a CheckoutError)

        Returns:
            Result instance with FAILURE status
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error
        )

    @classmethod
    def from_error(cls, error: CheckoutError) -> 'Result[T]':
        """Create a failure result from a checkout error value."""
        return cls.failure(error.message, error)

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Returns:
            The result value if successful

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Map a function over the success value.

        Args:
            func: Function to apply to the value (T -> U)

        Returns:
            New Result with mapped value if success, original failure otherwise
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)

        try:
            new_value = func(self.value)
            return Result.success(new_value, self.message)
        except Exception as e:
            return Result.failure(str(e), e)
