"""
Seed data for the checkout registry.

Seed files are JSON objects with "requesters" and "assets" lists;
request files are JSON lists of request objects. The defaults below
describe a small lab used when no files are given.
"""

import logging
from typing import Any, Dict, List, Optional

from .models.checkout import CheckoutRequest
from .models.entities import Asset, Requester
from .models.policy import CheckoutPolicy, DEFAULT_POLICY
from .registry.asset_registry import AssetRegistry


logger = logging.getLogger(__name__)


DEFAULT_SEED: Dict[str, List[Dict[str, Any]]] = {
    "requesters": [
        {"requester_id": "KRG11771", "name": "Arnav", "fine_amount": 0, "borrow_count": 0},
        {"requester_id": "ABC15456", "name": "Richa", "fine_amount": 100, "borrow_count": 0},
        {"requester_id": "KRG88999", "name": "Tarun", "fine_amount": 0, "borrow_count": 2},
    ],
    "assets": [
        {"asset_id": "LAB-101", "name": "HDMI Cable", "available": True, "security_level": 1},
        {"asset_id": "LAB-102", "name": "Oscilloscope", "available": True, "security_level": 3},
        {"asset_id": "LAB-103", "name": "Projector", "available": False, "security_level": 2},
    ],
}

DEFAULT_REQUESTS: List[Dict[str, Any]] = [
    {"requester_id": "KRG11771", "asset_id": "LAB-101", "duration_hours": 5},
    {"requester_id": "KRG11771", "asset_id": "LAB-XYZ", "duration_hours": 7},
    {"requester_id": "ABC12345", "asset_id": "LAB-102", "duration_hours": 2},
]


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _requester_errors(item: Dict[str, Any], policy: CheckoutPolicy) -> List[str]:
    errors = []
    fine = item.get("fine_amount", 0)
    if not _is_int(fine) or fine < 0:
        errors.append(f"fine_amount must be a non-negative integer, got {fine!r}")
    count = item.get("borrow_count", 0)
    if not _is_int(count) or not 0 <= count <= policy.max_borrow_count:
        errors.append(
            f"borrow_count must be an integer between 0 and "
            f"{policy.max_borrow_count}, got {count!r}"
        )
    return errors


def _asset_errors(item: Dict[str, Any]) -> List[str]:
    errors = []
    level = item.get("security_level", 1)
    if not _is_int(level):
        errors.append(f"security_level must be an integer, got {level!r}")
    available = item.get("available", True)
    if not isinstance(available, bool):
        errors.append(f"available must be true or false, got {available!r}")
    return errors


def build_registry(
    seed: Optional[Dict[str, Any]] = None,
    policy: CheckoutPolicy = DEFAULT_POLICY
) -> AssetRegistry:
    """
    Build a registry populated from seed data.

    Args:
        seed: Seed dictionary (defaults to DEFAULT_SEED)
        policy: Policy for the registry

    Returns:
        Populated AssetRegistry

    Raises:
        ValueError: If a seed record is missing fields or has values
            of the wrong type or out of range
    """
    seed = DEFAULT_SEED if seed is None else seed
    registry = AssetRegistry(policy)

    try:
        for item in seed.get("requesters", []):
            errors = _requester_errors(item, policy)
            if errors:
                raise ValueError(f"Invalid seed record: {item!r}: {'; '.join(errors)}")
            registry.register_requester(Requester(**item))
        for item in seed.get("assets", []):
            errors = _asset_errors(item)
            if errors:
                raise ValueError(f"Invalid seed record: {item!r}: {'; '.join(errors)}")
            registry.register_asset(Asset(**item))
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Invalid seed record: {e}")

    logger.info(
        f"Registry seeded with {len(registry.requesters())} requesters "
        f"and {len(registry.assets())} assets"
    )
    return registry


def parse_requests(items: Optional[List[Dict[str, Any]]] = None) -> List[CheckoutRequest]:
    """
    Build checkout requests from plain dictionaries.

    Field values are not validated here; that is the validator's job.

    Raises:
        ValueError: If an item is missing a field
    """
    items = DEFAULT_REQUESTS if items is None else items
    try:
        return [
            CheckoutRequest(
                requester_id=item["requester_id"],
                asset_id=item["asset_id"],
                duration_hours=item["duration_hours"]
            )
            for item in items
        ]
    except KeyError as e:
        raise ValueError(f"Request is missing field: {e}")
