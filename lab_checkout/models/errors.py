"""
Checkout error taxonomy.

This module defines the tagged error kinds reported by the checkout
pipeline and the error values carried inside a failed Result.
Errors are returned, never raised, by the checkout core.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Tagged reason for a rejected checkout."""
    MALFORMED_INPUT = "malformed-input"
    MISSING_ENTITY = "missing-entity"
    OUTSTANDING_FINE = "outstanding-fine"
    CAPACITY_REACHED = "capacity-reached"
    UNAVAILABLE = "unavailable"
    ALREADY_BORROWED = "already-borrowed"
    CLEARANCE_REQUIRED = "clearance-required"

    @property
    def category(self) -> str:
        """
        Get the reporting category of this kind.

        Fine and capacity failures are both policy violations; an asset
        that is not free is reported as unavailable whichever check caught it.

        Returns:
            Category string (e.g. "policy-violation")
        """
        return _CATEGORIES[self]


_CATEGORIES = {
    ErrorKind.MALFORMED_INPUT: "malformed-input",
    ErrorKind.MISSING_ENTITY: "missing-entity",
    ErrorKind.OUTSTANDING_FINE: "policy-violation",
    ErrorKind.CAPACITY_REACHED: "policy-violation",
    ErrorKind.UNAVAILABLE: "unavailable",
    ErrorKind.ALREADY_BORROWED: "unavailable",
    ErrorKind.CLEARANCE_REQUIRED: "clearance-required",
}


class CheckoutError(Exception):
    """
    Base error value for checkout failures.

    Attributes:
        kind: Tagged error kind
        message: Human-readable reason
        stage: Pipeline stage that rejected the request (set by the service)

    Examples:
        >>> error = PolicyError("Outstanding dues", ErrorKind.OUTSTANDING_FINE)
        >>> error.kind.category
        'policy-violation'
    """

    default_kind: ErrorKind = ErrorKind.MALFORMED_INPUT

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.stage = None

    @property
    def category(self) -> str:
        """Get the reporting category of the error."""
        return self.kind.category

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value!r}, {self.message!r})"


class ValidationError(CheckoutError):
    """Raw request fields are malformed."""
    default_kind = ErrorKind.MALFORMED_INPUT


class NotFoundError(CheckoutError):
    """Requester or asset identifier does not resolve."""
    default_kind = ErrorKind.MISSING_ENTITY


class ConflictError(CheckoutError):
    """Asset is not free to be borrowed."""
    default_kind = ErrorKind.UNAVAILABLE


class PolicyError(CheckoutError):
    """Requester standing does not allow another checkout."""
    default_kind = ErrorKind.CAPACITY_REACHED


class SecurityError(CheckoutError):
    """Requester lacks clearance for the asset's security tier."""
    default_kind = ErrorKind.CLEARANCE_REQUIRED
