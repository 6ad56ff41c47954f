"""
Lab asset checkout.

This package validates checkout requests for lab assets, applies
requester and asset policy, and issues receipts.

Usage:
    >>> from lab_checkout import CheckoutService, CheckoutRequest
    >>> from lab_checkout.seed import build_registry
    >>>
    >>> service = CheckoutService(build_registry())
    >>> result = service.process_checkout(CheckoutRequest("KRG11771", "LAB-101", 5))
    >>> result.value  # RECEIPT-<today>-LAB-101-KRG11771
"""

from .models.checkout import CheckoutRequest, CheckoutStage
from .models.entities import Asset, Requester
from .models.errors import ErrorKind
from .models.policy import CheckoutPolicy, DEFAULT_POLICY
from .models.result import Result
from .registry.asset_registry import AssetRegistry
from .services.checkout_service import CheckoutService

__all__ = [
    "Asset",
    "AssetRegistry",
    "CheckoutPolicy",
    "CheckoutRequest",
    "CheckoutService",
    "CheckoutStage",
    "DEFAULT_POLICY",
    "ErrorKind",
    "Requester",
    "Result",
]

__version__ = "0.1.0"
