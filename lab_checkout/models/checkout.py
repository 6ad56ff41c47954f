"""
Checkout request and outcome models.

This module provides the transient request handled by one checkout call,
the pipeline stages it moves through, and the per-request and batch
records used for reporting.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
from enum import Enum


class CheckoutStage(Enum):
    """Pipeline stage of a checkout request."""
    VALIDATING = "validating"
    RESOLVING = "resolving"
    POLICY_CHECK = "policy_check"
    ADJUSTING = "adjusting"
    COMMITTING = "committing"
    RECEIPTED = "receipted"


class CheckoutStatus(Enum):
    """Final status of a processed request."""
    SUCCESS = "success"
    REJECTED = "rejected"


@dataclass
class CheckoutRequest:
    """
    Request to borrow an asset.

    The duration may be reduced by policy while the request is processed;
    requested_hours keeps the value the requester asked for.

    Attributes:
        requester_id: Identifier of the requesting student
        asset_id: Identifier of the asset
        duration_hours: Effective duration in hours
        requested_hours: Original duration if it was restricted, else None

    Examples:
        >>> request = CheckoutRequest("KRG11771", "LAB-101", 5)
        >>> request.restrict_duration(3)
        True
        >>> request.duration_hours, request.requested_hours
        (3, 5)
    """

    requester_id: str
    asset_id: str
    duration_hours: int
    requested_hours: Optional[int] = None

    @property
    def is_restricted(self) -> bool:
        """Check if the duration was reduced by policy."""
        return self.requested_hours is not None

    def restrict_duration(self, limit: int) -> bool:
        """
        Clamp the duration to a limit in place.

        Args:
            limit: Maximum allowed hours

        Returns:
            True if the duration was reduced
        """
        if self.duration_hours <= limit:
            return False

        if self.requested_hours is None:
            self.requested_hours = self.duration_hours
        self.duration_hours = limit
        return True


@dataclass
class CheckoutOutcome:
    """
    Result of processing one request in a batch.

    Attributes:
        request: Request that was processed
        status: Final status
        receipt: Receipt string if successful
        error_kind: Tagged error kind value if rejected
        category: Reporting category if rejected
        message: Rejection reason if rejected
        stage: Stage that rejected the request
    """

    request: CheckoutRequest
    status: CheckoutStatus
    receipt: Optional[str] = None
    error_kind: Optional[str] = None
    category: Optional[str] = None
    message: Optional[str] = None
    stage: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the checkout succeeded."""
        return self.status == CheckoutStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Flat dictionary suitable for JSON or CSV reports
        """
        return {
            "requester_id": self.request.requester_id,
            "asset_id": self.request.asset_id,
            "duration_hours": self.request.duration_hours,
            "requested_hours": self.request.requested_hours,
            "status": self.status.value,
            "receipt": self.receipt,
            "error_kind": self.error_kind,
            "category": self.category,
            "message": self.message,
            "stage": self.stage
        }


@dataclass
class CheckoutSummary:
    """
    Summary of a batch of checkout requests.

    Attributes:
        execution_time: Execution timestamp (ISO 8601)
        results: Per-request outcomes in processing order
    """

    execution_time: str
    results: List[CheckoutOutcome] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.results if outcome.is_success)

    @property
    def failed(self) -> int:
        return self.processed - self.succeeded

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "execution_time": self.execution_time,
            "processed": self.processed,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [outcome.to_dict() for outcome in self.results]
        }
