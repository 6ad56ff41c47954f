"""Receipt formatting."""

from datetime import date


RECEIPT_PREFIX = "RECEIPT"


def build_receipt(asset_id: str, requester_id: str, issued_on: date) -> str:
    """
    Build the receipt string for a successful checkout.

    Args:
        asset_id: Borrowed asset identifier
        requester_id: Borrowing requester identifier
        issued_on: Checkout date

    Returns:
        Receipt of the form "RECEIPT-<YYYYMMDD>-<assetId>-<requesterId>"

    Examples:
        >>> build_receipt("LAB-101", "KRG11771", date(2025, 10, 15))
        'RECEIPT-20251015-LAB-101-KRG11771'
    """
    return "-".join([
        RECEIPT_PREFIX,
        issued_on.strftime("%Y%m%d"),
        asset_id,
        requester_id
    ])
