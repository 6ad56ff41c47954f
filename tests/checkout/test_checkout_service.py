"""
Tests for CheckoutService.

Runs the full pipeline against an in-memory registry with a fixed date
and a recording notifier.
"""

from datetime import date
from unittest.mock import Mock

import pytest

from lab_checkout.models.checkout import CheckoutRequest, CheckoutStage
from lab_checkout.models.entities import Asset, Requester
from lab_checkout.models.errors import ErrorKind
from lab_checkout.models.policy import CheckoutPolicy
from lab_checkout.notification.notifier import MemoryNotifier
from lab_checkout.registry.asset_registry import AssetRegistry
from lab_checkout.seed import build_registry
from lab_checkout.services.checkout_service import MAX_DURATION_NOTICE, CheckoutService
from lab_checkout.services.receipt import build_receipt
from lab_checkout.validation.request_validator import CheckoutRequestValidator


TODAY = date(2025, 10, 15)
CABLE_NOTICE = "Restriction Applied: Cable usage limited to 3 hours."


class TestCheckoutService:
    """Test suite for CheckoutService."""

    @pytest.fixture
    def registry(self):
        """Registry seeded with the demo lab."""
        registry = build_registry()
        registry.register_asset(Asset("LAB-104", "Multimeter", available=True, security_level=1))
        registry.register_requester(Requester("ABC77777", "Mira"))
        return registry

    @pytest.fixture
    def notifier(self):
        return MemoryNotifier()

    @pytest.fixture
    def service(self, registry, notifier):
        return CheckoutService(registry, notifier=notifier, today=lambda: TODAY)

    def test_cable_checkout_end_to_end(self, service, registry, notifier):
        """Cable asset for 5 hours is clamped to 3 and committed."""
        request = CheckoutRequest("KRG11771", "LAB-101", 5)

        result = service.process_checkout(request)

        assert result.is_success
        assert result.value == "RECEIPT-20251015-LAB-101-KRG11771"
        assert request.duration_hours == 3
        assert request.requested_hours == 5
        assert CABLE_NOTICE in notifier.messages
        assert not registry.get_asset("LAB-101").unwrap().available
        assert registry.get_requester("KRG11771").unwrap().borrow_count == 1
        assert notifier.failures == []

    def test_second_identical_request_is_unavailable(self, service):
        service.process_checkout(CheckoutRequest("KRG11771", "LAB-101", 2))

        result = service.process_checkout(CheckoutRequest("KRG11771", "LAB-101", 2))

        assert result.is_failure
        assert result.kind == ErrorKind.UNAVAILABLE
        assert result.error.stage == CheckoutStage.POLICY_CHECK

    def test_non_cable_duration_unchanged(self, service, notifier):
        request = CheckoutRequest("ABC77777", "LAB-104", 5)

        assert service.process_checkout(request).is_success
        assert request.duration_hours == 5
        assert not request.is_restricted
        assert CABLE_NOTICE not in notifier.messages

    def test_malformed_asset_reported_before_duration(self, service, registry, notifier):
        result = service.process_checkout(CheckoutRequest("KRG11771", "LAB-XYZ", 7))

        assert result.kind == ErrorKind.MALFORMED_INPUT
        assert result.error.stage == CheckoutStage.VALIDATING
        assert "Asset ID" in result.message
        assert notifier.failures == [("malformed-input", result.message)]
        assert registry.get_requester("KRG11771").unwrap().borrow_count == 0

    def test_unknown_requester(self, service, registry):
        result = service.process_checkout(CheckoutRequest("ABC12345", "LAB-102", 2))

        assert result.kind == ErrorKind.MISSING_ENTITY
        assert result.error.stage == CheckoutStage.RESOLVING
        assert registry.get_asset("LAB-102").unwrap().available

    def test_unknown_asset(self, service):
        result = service.process_checkout(CheckoutRequest("KRG11771", "LAB-999", 2))

        assert result.kind == ErrorKind.MISSING_ENTITY
        assert "LAB-999" in result.message

    def test_outstanding_fine(self, service, registry):
        result = service.process_checkout(CheckoutRequest("ABC15456", "LAB-104", 2))

        assert result.kind == ErrorKind.OUTSTANDING_FINE
        assert result.error.category == "policy-violation"
        assert registry.get_asset("LAB-104").unwrap().available

    def test_fine_reported_over_capacity(self, service, registry):
        registry.register_requester(Requester("ABC99999", "Both", fine_amount=10, borrow_count=2))

        result = service.process_checkout(CheckoutRequest("ABC99999", "LAB-104", 2))

        assert result.kind == ErrorKind.OUTSTANDING_FINE

    def test_capacity_reached(self, service):
        result = service.process_checkout(CheckoutRequest("KRG88999", "LAB-104", 2))

        assert result.kind == ErrorKind.CAPACITY_REACHED

    def test_eligibility_checked_before_asset(self, service):
        """Fined requester asking for a borrowed asset is reported for the fine."""
        result = service.process_checkout(CheckoutRequest("ABC15456", "LAB-103", 2))

        assert result.kind == ErrorKind.OUTSTANDING_FINE

    def test_clearance_required(self, service):
        result = service.process_checkout(CheckoutRequest("ABC77777", "LAB-102", 2))

        assert result.kind == ErrorKind.CLEARANCE_REQUIRED
        assert result.error.stage == CheckoutStage.POLICY_CHECK

    def test_clearance_prefix_passes(self, service):
        result = service.process_checkout(CheckoutRequest("KRG11771", "LAB-102", 2))

        assert result.is_success
        assert result.value == "RECEIPT-20251015-LAB-102-KRG11771"

    def test_max_duration_notice(self, service, notifier):
        request = CheckoutRequest("ABC77777", "LAB-104", 6)

        assert service.process_checkout(request).is_success
        assert notifier.messages == [MAX_DURATION_NOTICE]

    def test_max_duration_notice_uses_requested_value(self, service, notifier):
        """Cable clamp happens after the maximum-duration advisory."""
        request = CheckoutRequest("KRG11771", "LAB-101", 6)

        assert service.process_checkout(request).is_success
        assert notifier.messages == [MAX_DURATION_NOTICE, CABLE_NOTICE]
        assert request.duration_hours == 3

    def test_third_checkout_refused(self, service, registry):
        registry.register_asset(Asset("LAB-201", "Breadboard"))
        registry.register_asset(Asset("LAB-202", "Soldering Iron"))
        registry.register_asset(Asset("LAB-203", "Power Supply"))

        assert service.process_checkout(CheckoutRequest("ABC77777", "LAB-201", 1)).is_success
        assert service.process_checkout(CheckoutRequest("ABC77777", "LAB-202", 1)).is_success

        third = service.process_checkout(CheckoutRequest("ABC77777", "LAB-203", 1))

        assert third.kind == ErrorKind.CAPACITY_REACHED
        assert registry.get_requester("ABC77777").unwrap().borrow_count == 2
        assert registry.get_asset("LAB-203").unwrap().available

    def test_notifier_failure_does_not_change_result(self, registry):
        notifier = Mock()
        notifier.record.side_effect = RuntimeError("sink down")
        notifier.record_failure.side_effect = RuntimeError("sink down")
        service = CheckoutService(registry, notifier=notifier, today=lambda: TODAY)

        success = service.process_checkout(CheckoutRequest("KRG11771", "LAB-101", 6))
        failure = service.process_checkout(CheckoutRequest("ABC12345", "LAB-102", 2))

        assert success.is_success
        assert failure.kind == ErrorKind.MISSING_ENTITY
        assert notifier.record.called
        notifier.record_failure.assert_called_once_with("missing-entity", failure.message)

    def test_injected_validator_is_used(self, registry):
        validator = Mock()
        validator.validate.return_value.is_valid = False
        validator.validate.return_value.first_error = "rejected by fake"
        service = CheckoutService(registry, validator=validator, notifier=MemoryNotifier())

        result = service.process_checkout(CheckoutRequest("KRG11771", "LAB-101", 2))

        assert result.kind == ErrorKind.MALFORMED_INPUT
        assert result.message == "rejected by fake"

    def test_custom_policy(self, notifier):
        policy = CheckoutPolicy(max_duration_hours=8, clearance_prefix="STF")
        registry = AssetRegistry(policy)
        registry.register_requester(Requester("STF00001", "Staff"))
        registry.register_asset(Asset("LAB-500", "Spectrum Analyzer", security_level=3))
        service = CheckoutService(registry, notifier=notifier, today=lambda: TODAY)

        result = service.process_checkout(CheckoutRequest("STF00001", "LAB-500", 8))

        assert result.is_success
        assert notifier.messages == [MAX_DURATION_NOTICE]

    def test_default_validator_follows_service_policy(self):
        policy = CheckoutPolicy(max_duration_hours=8)
        service = CheckoutService(AssetRegistry(policy), notifier=MemoryNotifier())

        assert service.validator.policy is policy

    def test_validator_with_other_policy_rejected(self, registry):
        validator = CheckoutRequestValidator(CheckoutPolicy(max_duration_hours=8))

        with pytest.raises(ValueError, match="Validator policy does not match"):
            CheckoutService(registry, validator=validator)

    def test_validator_with_matching_policy_accepted(self, registry):
        validator = CheckoutRequestValidator(registry.policy)
        service = CheckoutService(registry, validator=validator)

        assert service.validator is validator


class TestReceipt:
    """Test cases for receipt formatting."""

    def test_format(self):
        assert build_receipt("LAB-101", "KRG11771", date(2025, 1, 5)) == "RECEIPT-20250105-LAB-101-KRG11771"

    def test_default_date_is_today(self):
        registry = build_registry()
        service = CheckoutService(registry, notifier=MemoryNotifier())

        result = service.process_checkout(CheckoutRequest("KRG11771", "LAB-101", 5))

        assert result.value == f"RECEIPT-{date.today().strftime('%Y%m%d')}-LAB-101-KRG11771"
