"""
Unit tests for AssetRegistry.
"""

import threading

import pytest

from lab_checkout.models.entities import Asset, Requester
from lab_checkout.models.errors import ErrorKind
from lab_checkout.registry.asset_registry import AssetRegistry


class TestAssetRegistry:
    """Test cases for AssetRegistry."""

    @pytest.fixture
    def registry(self):
        """Create a registry with one requester and one asset."""
        registry = AssetRegistry()
        registry.register_requester(Requester("KRG11771", "Arnav"))
        registry.register_asset(Asset("LAB-101", "HDMI Cable"))
        return registry

    def test_get_registered_entities(self, registry):
        assert registry.get_asset("LAB-101").unwrap().name == "HDMI Cable"
        assert registry.get_requester("KRG11771").unwrap().name == "Arnav"

    def test_missing_asset(self, registry):
        result = registry.get_asset("LAB-999")

        assert result.kind == ErrorKind.MISSING_ENTITY
        assert "LAB-999" in result.message

    def test_missing_requester(self, registry):
        assert registry.get_requester("ABC12345").kind == ErrorKind.MISSING_ENTITY

    def test_register_overwrites(self, registry):
        registry.register_asset(Asset("LAB-101", "Logic Analyzer"))

        assert registry.get_asset("LAB-101").unwrap().name == "Logic Analyzer"
        assert len(registry.assets()) == 1

    def test_mark_borrowed(self, registry):
        asset = registry.get_asset("LAB-101").unwrap()

        assert registry.mark_borrowed(asset).is_success
        assert not asset.available

        second = registry.mark_borrowed(asset)
        assert second.kind == ErrorKind.ALREADY_BORROWED

    def test_increment_borrow_count(self, registry):
        requester = registry.get_requester("KRG11771").unwrap()

        assert registry.increment_borrow_count(requester).value == 1
        assert registry.increment_borrow_count(requester).value == 2

        refused = registry.increment_borrow_count(requester)
        assert refused.kind == ErrorKind.CAPACITY_REACHED
        assert requester.borrow_count == 2

    def test_commit_checkout(self, registry):
        asset = registry.get_asset("LAB-101").unwrap()
        requester = registry.get_requester("KRG11771").unwrap()

        assert registry.commit_checkout(asset, requester).is_success
        assert not asset.available
        assert requester.borrow_count == 1

    def test_commit_at_capacity_leaves_asset_untouched(self, registry):
        asset = registry.get_asset("LAB-101").unwrap()
        requester = Requester("KRG88999", "Tarun", borrow_count=2)

        result = registry.commit_checkout(asset, requester)

        assert result.kind == ErrorKind.CAPACITY_REACHED
        assert asset.available
        assert requester.borrow_count == 2

    def test_commit_borrowed_asset_leaves_count_untouched(self, registry):
        asset = Asset("LAB-103", "Projector", available=False)
        requester = registry.get_requester("KRG11771").unwrap()

        result = registry.commit_checkout(asset, requester)

        assert result.kind == ErrorKind.ALREADY_BORROWED
        assert requester.borrow_count == 0

    def test_concurrent_mark_borrowed_succeeds_once(self, registry):
        """Only one of many overlapping calls may borrow the asset."""
        asset = registry.get_asset("LAB-101").unwrap()
        results = []
        barrier = threading.Barrier(8)

        def borrow():
            barrier.wait()
            results.append(registry.mark_borrowed(asset))

        threads = [threading.Thread(target=borrow) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sum(1 for result in results if result.is_success) == 1
