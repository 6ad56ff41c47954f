"""
Checkout policy constants.

All business limits used by validation, entity predicates and the
checkout service live on one frozen dataclass so they can be overridden
from configuration in a single place.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutPolicy:
    """
    Business limits for lab asset checkout.

    Attributes:
        identifier_min_length: Shortest accepted requester identifier
        identifier_max_length: Longest accepted requester identifier
        asset_prefix: Literal prefix of every asset identifier
        min_duration_hours: Shortest checkout duration
        max_duration_hours: Longest checkout duration
        max_borrow_count: Concurrent borrows allowed per requester
        max_security_level: Security tier that requires clearance
        clearance_prefix: Identifier prefix that grants clearance
        restricted_keyword: Asset name fragment that triggers the duration limit
        restricted_max_hours: Duration limit for restricted assets

    Examples:
        >>> policy = CheckoutPolicy(max_duration_hours=8)
        >>> policy.max_borrow_count
        2
    """

    identifier_min_length: int = 8
    identifier_max_length: int = 12
    asset_prefix: str = "LAB-"
    min_duration_hours: int = 1
    max_duration_hours: int = 6
    max_borrow_count: int = 2
    max_security_level: int = 3
    clearance_prefix: str = "KRG"
    restricted_keyword: str = "Cable"
    restricted_max_hours: int = 3


DEFAULT_POLICY = CheckoutPolicy()
