"""
Batch processing of checkout requests.

A rejected request never stops the batch; every request gets an outcome.
An exception raised while processing one request is logged and recorded
as a rejection in the "unexpected-error" category.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..models.checkout import (
    CheckoutOutcome,
    CheckoutRequest,
    CheckoutStatus,
    CheckoutSummary,
)
from ..models.errors import CheckoutError
from ..notification.notifier import Notifier
from .checkout_service import CheckoutService


logger = logging.getLogger(__name__)


UNEXPECTED_ERROR = "unexpected-error"


def to_outcome(request: CheckoutRequest, result) -> CheckoutOutcome:
    """
    Convert a checkout Result into a reportable outcome.

    Args:
        request: Processed request
        result: Result returned by CheckoutService.process_checkout

    Returns:
        CheckoutOutcome for the request
    """
    if result.is_success:
        return CheckoutOutcome(
            request=request,
            status=CheckoutStatus.SUCCESS,
            receipt=result.value
        )

    error = result.error
    if isinstance(error, CheckoutError):
        return CheckoutOutcome(
            request=request,
            status=CheckoutStatus.REJECTED,
            error_kind=error.kind.value,
            category=error.category,
            message=error.message,
            stage=error.stage.value if error.stage else None
        )

    return CheckoutOutcome(
        request=request,
        status=CheckoutStatus.REJECTED,
        message=result.message
    )


def process_batch(
    service: CheckoutService,
    requests: Iterable[CheckoutRequest],
    notifier: Optional[Notifier] = None
) -> CheckoutSummary:
    """
    Run every request through the checkout service.

    Args:
        service: Checkout service to use
        requests: Requests in processing order
        notifier: Receives a completion notice per request
            (defaults to the service's notifier)

    Returns:
        CheckoutSummary with one outcome per request
    """
    notifier = notifier or service.notifier
    summary = CheckoutSummary(execution_time=datetime.now().isoformat())

    for request in requests:
        try:
            result = service.process_checkout(request)
            outcome = to_outcome(request, result)
        except Exception as e:
            logger.error(
                f"Unexpected error processing uid={request.requester_id}, "
                f"asset={request.asset_id}: {e}",
                exc_info=True
            )
            outcome = CheckoutOutcome(
                request=request,
                status=CheckoutStatus.REJECTED,
                category=UNEXPECTED_ERROR,
                message=f"Unexpected error: {e}"
            )
        summary.results.append(outcome)

        try:
            notifier.record(
                f"Processing completed for UID={request.requester_id}, "
                f"AssetID={request.asset_id}"
            )
        except Exception as e:
            logger.warning(f"Notifier failed to record completion: {e}", exc_info=True)

    logger.info(
        f"Batch finished: {summary.succeeded} succeeded, "
        f"{summary.failed} failed of {summary.processed}"
    )
    return summary
