"""
Requester and asset entities.

Each entity owns the policy predicates that decide whether it may take
part in a checkout. Predicates are read-only; state changes go through
AssetRegistry.
"""

from dataclasses import dataclass

from .errors import ConflictError, ErrorKind, PolicyError, SecurityError
from .policy import CheckoutPolicy, DEFAULT_POLICY
from .result import Result


@dataclass
class Requester:
    """
    Student who borrows lab assets.

    Attributes:
        requester_id: Fixed-format identifier (e.g. "KRG11771")
        name: Display name
        fine_amount: Outstanding fine (non-negative)
        borrow_count: Number of assets currently borrowed

    Examples:
        >>> student = Requester("KRG11771", "Arnav")
        >>> student.verify_eligibility().is_success
        True
    """

    requester_id: str
    name: str
    fine_amount: int = 0
    borrow_count: int = 0

    def verify_eligibility(
        self,
        policy: CheckoutPolicy = DEFAULT_POLICY
    ) -> Result[None]:
        """
        Check the requester's standing.

        The fine check runs before the capacity check, so a requester
        with both violations is reported for the fine.

        Args:
            policy: Business limits to apply

        Returns:
            Success, or failure with a PolicyError
        """
        if self.fine_amount > 0:
            return Result.from_error(PolicyError(
                "Outstanding dues detected for this student.",
                ErrorKind.OUTSTANDING_FINE
            ))

        if self.borrow_count >= policy.max_borrow_count:
            return Result.from_error(PolicyError(
                "Maximum borrowing capacity reached.",
                ErrorKind.CAPACITY_REACHED
            ))

        return Result.success(None)


@dataclass
class Asset:
    """
    Borrowable lab asset.

    Attributes:
        asset_id: Identifier of the form "LAB-<digits>"
        name: Display name
        available: Whether the asset can be checked out now
        security_level: Security tier (1-3)
    """

    asset_id: str
    name: str
    available: bool = True
    security_level: int = 1

    def verify_access(
        self,
        requester_id: str,
        policy: CheckoutPolicy = DEFAULT_POLICY
    ) -> Result[None]:
        """
        Check that the asset is free and the requester is cleared for it.

        Availability is checked before clearance.

        Args:
            requester_id: Identifier of the requesting student
            policy: Business limits to apply

        Returns:
            Success, or failure with a ConflictError or SecurityError
        """
        if not self.available:
            return Result.from_error(ConflictError(
                "Requested asset is currently issued.",
                ErrorKind.UNAVAILABLE
            ))

        if (
            self.security_level == policy.max_security_level
            and not requester_id.startswith(policy.clearance_prefix)
        ):
            return Result.from_error(SecurityError(
                "High security clearance required for this asset.",
                ErrorKind.CLEARANCE_REQUIRED
            ))

        return Result.success(None)

    def is_duration_restricted(
        self,
        policy: CheckoutPolicy = DEFAULT_POLICY
    ) -> bool:
        """Check whether checkouts of this asset have a shorter limit."""
        return policy.restricted_keyword in self.name
