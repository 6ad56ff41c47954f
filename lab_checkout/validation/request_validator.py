"""
Checkout request validator.

Syntactic checks on raw request fields. No entity lookup happens here.
"""

import logging
from typing import Any, Optional

from ..models.checkout import CheckoutRequest
from ..models.policy import CheckoutPolicy, DEFAULT_POLICY
from .validators import Validator, ValidationResult


logger = logging.getLogger(__name__)


class CheckoutRequestValidator(Validator):
    """
    Validator for checkout requests.

    Checks run in a fixed order (requester identifier, asset identifier,
    duration) and validation stops at the first failure, so the result
    holds at most one error.

    Examples:
        >>> validator = CheckoutRequestValidator()
        >>> result = validator.validate(CheckoutRequest("KRG11771", "LAB-XYZ", 7))
        >>> result.first_error
        'Asset ID must contain digits after prefix.'
    """

    def __init__(self, policy: CheckoutPolicy = DEFAULT_POLICY):
        self.policy = policy

    def check_identifier(self, uid: Any) -> Optional[str]:
        """
        Check a requester identifier.

        Args:
            uid: Requester identifier

        Returns:
            Error message if absent, too short or long, or containing
            whitespace; None otherwise
        """
        if uid is None:
            return "UID is required."

        error = self.validate_string_length(
            uid,
            "UID",
            min_length=self.policy.identifier_min_length,
            max_length=self.policy.identifier_max_length
        )
        if error:
            return f"UID does not meet required format: {error}."

        error = self.validate_no_whitespace(uid, "UID")
        if error:
            return f"UID does not meet required format: {error}."

        return None

    def check_asset_identifier(self, asset_id: Any) -> Optional[str]:
        """
        Check an asset identifier of the form "LAB-<digits>".

        An empty digit suffix is rejected.

        Args:
            asset_id: Asset identifier

        Returns:
            Error message if invalid, None otherwise
        """
        prefix = self.policy.asset_prefix

        if not isinstance(asset_id, str) or not asset_id.startswith(prefix):
            return f"Asset ID should begin with {prefix}."

        digits = asset_id[len(prefix):]
        if not digits:
            return "Asset ID must contain digits after prefix."

        # ASCII digits only
        if not all(char in "0123456789" for char in digits):
            return "Asset ID must contain digits after prefix."

        return None

    def check_duration(self, hours: Any) -> Optional[str]:
        """Check that the duration is a whole number of hours within limits."""
        error = self.validate_integer_range(
            hours,
            "Requested duration",
            self.policy.min_duration_hours,
            self.policy.max_duration_hours
        )
        if error:
            return (
                f"Requested duration must be between "
                f"{self.policy.min_duration_hours} and "
                f"{self.policy.max_duration_hours} hours."
            )
        return None

    def validate(self, data: CheckoutRequest) -> ValidationResult:
        """
        Validate a checkout request.

        Args:
            data: Request to validate

        Returns:
            ValidationResult holding the first failing check, if any
        """
        result = ValidationResult(is_valid=True)

        checks = [
            (self.check_identifier, data.requester_id),
            (self.check_asset_identifier, data.asset_id),
            (self.check_duration, data.duration_hours),
        ]

        for check, value in checks:
            error = check(value)
            if error:
                logger.debug(f"Validation failed in {check.__name__}: {error}")
                return result.add_error(error)

        return result
