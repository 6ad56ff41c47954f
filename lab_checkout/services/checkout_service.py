"""
Checkout orchestration.

CheckoutService runs one request through the pipeline
validating -> resolving -> policy check -> adjusting -> committing ->
receipted. The first failing step rejects the request; nothing is
committed unless every earlier step passed.
"""

import logging
from datetime import date
from typing import Callable, Optional

from ..models.checkout import CheckoutRequest, CheckoutStage
from ..models.errors import CheckoutError, ErrorKind, ValidationError
from ..models.policy import CheckoutPolicy, DEFAULT_POLICY
from ..models.result import Result
from ..notification.notifier import LoggingNotifier, Notifier
from ..registry.asset_registry import AssetRegistry
from ..validation.request_validator import CheckoutRequestValidator
from .receipt import build_receipt


logger = logging.getLogger(__name__)


MAX_DURATION_NOTICE = "Notice: You have selected the maximum allowable duration."


class CheckoutService:
    """
    Checkout decision pipeline.

    Collaborators are passed in so tests can substitute fakes. When no
    validator is given one is built from the service policy; an injected
    CheckoutRequestValidator must carry that same policy.

    Attributes:
        registry: Registry holding assets and requesters
        validator: Syntactic request validator
        notifier: Sink for notices and failure summaries
        policy: Business limits
        today: Callable returning the checkout date

    Examples:
        >>> service = CheckoutService(registry)
        >>> result = service.process_checkout(
        ...     CheckoutRequest("KRG11771", "LAB-101", 5)
        ... )
        >>> if result.is_success:
        ...     print(result.value)  # RECEIPT-20251015-LAB-101-KRG11771
    """

    def __init__(
        self,
        registry: AssetRegistry,
        validator: Optional[CheckoutRequestValidator] = None,
        notifier: Optional[Notifier] = None,
        policy: Optional[CheckoutPolicy] = None,
        today: Callable[[], date] = date.today
    ):
        self.registry = registry
        self.policy = policy or registry.policy or DEFAULT_POLICY
        if isinstance(validator, CheckoutRequestValidator) and validator.policy != self.policy:
            raise ValueError("Validator policy does not match the checkout policy")
        self.validator = validator or CheckoutRequestValidator(self.policy)
        self.notifier = notifier or LoggingNotifier()
        self.today = today

    def process_checkout(self, request: CheckoutRequest) -> Result[str]:
        """
        Process a checkout request.

        Args:
            request: Request to process; its duration may be reduced in place

        Returns:
            Result containing the receipt string, or a failure whose error
            is a CheckoutError tagged with the rejecting stage
        """
        logger.info(
            f"Processing checkout: uid={request.requester_id}, "
            f"asset={request.asset_id}, hours={request.duration_hours}"
        )

        result = self._run_pipeline(request)

        if result.is_failure:
            error = result.error
            category = error.category if isinstance(error, CheckoutError) else "unknown"
            logger.info(f"Checkout rejected ({category}): {result.message}")
            self._notify_failure(category, result.message)
        else:
            logger.info(f"Checkout completed: {result.value}")

        return result

    def _run_pipeline(self, request: CheckoutRequest) -> Result[str]:
        # Validating
        validation = self.validator.validate(request)
        if not validation.is_valid:
            return self._reject(
                CheckoutStage.VALIDATING,
                Result.from_error(ValidationError(
                    validation.first_error,
                    ErrorKind.MALFORMED_INPUT
                ))
            )

        # Resolving
        requester_result = self.registry.get_requester(request.requester_id)
        if requester_result.is_failure:
            return self._reject(CheckoutStage.RESOLVING, requester_result)
        requester = requester_result.value

        asset_result = self.registry.get_asset(request.asset_id)
        if asset_result.is_failure:
            return self._reject(CheckoutStage.RESOLVING, asset_result)
        asset = asset_result.value

        # Policy check, against the request as submitted
        eligibility = requester.verify_eligibility(self.policy)
        if eligibility.is_failure:
            return self._reject(CheckoutStage.POLICY_CHECK, eligibility)

        access = asset.verify_access(request.requester_id, self.policy)
        if access.is_failure:
            return self._reject(CheckoutStage.POLICY_CHECK, access)

        # Adjusting
        if request.duration_hours == self.policy.max_duration_hours:
            self._notify(MAX_DURATION_NOTICE)

        if asset.is_duration_restricted(self.policy):
            limit = self.policy.restricted_max_hours
            if request.restrict_duration(limit):
                self._notify(
                    f"Restriction Applied: {self.policy.restricted_keyword} "
                    f"usage limited to {limit} hours."
                )

        # Committing
        committed = self.registry.commit_checkout(asset, requester)
        if committed.is_failure:
            return self._reject(CheckoutStage.COMMITTING, committed)

        receipt = build_receipt(asset.asset_id, requester.requester_id, self.today())
        return Result.success(receipt, f"Checkout {CheckoutStage.RECEIPTED.value}")

    def _reject(self, stage: CheckoutStage, result: Result) -> Result[str]:
        if isinstance(result.error, CheckoutError):
            result.error.stage = stage
        logger.debug(f"Rejected at stage {stage.value}: {result.message}")
        return Result.failure(result.message, result.error)

    def _notify(self, message: str):
        try:
            self.notifier.record(message)
        except Exception as e:
            logger.warning(f"Notifier failed to record message: {e}", exc_info=True)

    def _notify_failure(self, category: str, message: str):
        try:
            self.notifier.record_failure(category, message)
        except Exception as e:
            logger.warning(f"Notifier failed to record failure: {e}", exc_info=True)
