"""
In-memory registry of assets and requesters.

The registry resolves entities by identifier and is the only place that
changes their state. mark_borrowed and increment_borrow_count are
check-and-set operations under a single lock, so no asset is lent twice
and no requester exceeds the borrow limit even if calls overlap.
"""

import logging
import threading
from typing import Dict, List

from ..models.entities import Asset, Requester
from ..models.errors import ConflictError, ErrorKind, NotFoundError, PolicyError
from ..models.policy import CheckoutPolicy, DEFAULT_POLICY
from ..models.result import Result


logger = logging.getLogger(__name__)


class AssetRegistry:
    """
    Identifier-keyed store of assets and requesters.

    Examples:
        >>> registry = AssetRegistry()
        >>> registry.register_asset(Asset("LAB-101", "HDMI Cable"))
        >>> asset = registry.get_asset("LAB-101").unwrap()
        >>> registry.mark_borrowed(asset).is_success
        True
        >>> registry.mark_borrowed(asset).kind
        <ErrorKind.ALREADY_BORROWED: 'already-borrowed'>
    """

    def __init__(self, policy: CheckoutPolicy = DEFAULT_POLICY):
        self.policy = policy
        self._assets: Dict[str, Asset] = {}
        self._requesters: Dict[str, Requester] = {}
        self._lock = threading.RLock()

    def register_asset(self, asset: Asset):
        """Insert an asset, replacing any asset with the same identifier."""
        with self._lock:
            self._assets[asset.asset_id] = asset
        logger.debug(f"Registered asset: {asset.asset_id}")

    def register_requester(self, requester: Requester):
        """Insert a requester, replacing any requester with the same identifier."""
        with self._lock:
            self._requesters[requester.requester_id] = requester
        logger.debug(f"Registered requester: {requester.requester_id}")

    def get_asset(self, asset_id: str) -> Result[Asset]:
        """
        Look up an asset.

        Args:
            asset_id: Asset identifier

        Returns:
            Result containing the Asset, or a NotFoundError failure
        """
        asset = self._assets.get(asset_id)
        if asset is None:
            return Result.from_error(NotFoundError(
                f"No asset available with ID: {asset_id}",
                ErrorKind.MISSING_ENTITY
            ))
        return Result.success(asset)

    def get_requester(self, requester_id: str) -> Result[Requester]:
        """
        Look up a requester.

        Args:
            requester_id: Requester identifier

        Returns:
            Result containing the Requester, or a NotFoundError failure
        """
        requester = self._requesters.get(requester_id)
        if requester is None:
            return Result.from_error(NotFoundError(
                "Student record not located.",
                ErrorKind.MISSING_ENTITY
            ))
        return Result.success(requester)

    def mark_borrowed(self, asset: Asset) -> Result[None]:
        """
        Flip an asset from available to borrowed.

        This is the only operation that clears the availability flag.

        Args:
            asset: Asset to mark

        Returns:
            Success, or a ConflictError failure if already borrowed
        """
        with self._lock:
            if not asset.available:
                return Result.from_error(ConflictError(
                    "Asset already allocated.",
                    ErrorKind.ALREADY_BORROWED
                ))
            asset.available = False

        logger.debug(f"Asset marked borrowed: {asset.asset_id}")
        return Result.success(None)

    def increment_borrow_count(self, requester: Requester) -> Result[int]:
        """
        Add one to a requester's borrow count.

        Args:
            requester: Requester to update

        Returns:
            Result containing the new count, or a PolicyError failure if
            the requester is already at the limit
        """
        with self._lock:
            if requester.borrow_count >= self.policy.max_borrow_count:
                return Result.from_error(PolicyError(
                    "Maximum borrowing capacity reached.",
                    ErrorKind.CAPACITY_REACHED
                ))
            requester.borrow_count += 1
            count = requester.borrow_count

        logger.debug(f"Borrow count for {requester.requester_id} is now {count}")
        return Result.success(count)

    def commit_checkout(self, asset: Asset, requester: Requester) -> Result[None]:
        """
        Apply both state changes of a successful checkout.

        Capacity is re-checked before the asset is touched, so either
        both changes happen or neither does.

        Args:
            asset: Asset being borrowed
            requester: Requester borrowing it

        Returns:
            Success, or the failure of the first check that did not pass
        """
        with self._lock:
            if requester.borrow_count >= self.policy.max_borrow_count:
                return Result.from_error(PolicyError(
                    "Maximum borrowing capacity reached.",
                    ErrorKind.CAPACITY_REACHED
                ))

            marked = self.mark_borrowed(asset)
            if marked.is_failure:
                return marked

            return self.increment_borrow_count(requester).map(lambda _: None)

    def assets(self) -> List[Asset]:
        """Get all registered assets."""
        return list(self._assets.values())

    def requesters(self) -> List[Requester]:
        """Get all registered requesters."""
        return list(self._requesters.values())
