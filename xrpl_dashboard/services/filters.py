"""
Filter builders shared by the dashboard, transaction and miner endpoints.

Pure functions mapping request parameters to MongoDB filter documents.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from xrpl_dashboard.domain.models.order import ALL_SENTINEL
from xrpl_dashboard.shared.exceptions import ValidationError
from xrpl_dashboard.utils.dates import parse_datetime

# Field names the ingestion pipeline has used for the owning user, in match order
IDENTITY_FIELDS = ("user_id", "userId", "id", "account", "Account", "address")


def is_active(value: Optional[str]) -> bool:
    """True when a filter parameter is present, non-empty and not "ALL"."""
    if value is None:
        return False
    text = str(value).strip()
    return bool(text) and text.upper() != ALL_SENTINEL


def build_identity_filter(user_id: Optional[str]) -> Dict[str, Any]:
    """
    Match a user under any of the identity field names.

    Older documents store the owner under different field names and casings,
    so each field is tried with the literal and the lowercased identifier.
    The list is always field-major with the literal first, even when both
    values are equal.

    Example:
        >>> build_identity_filter("Abc123")["$or"][:2]
        [{'user_id': 'Abc123'}, {'user_id': 'abc123'}]
        >>> build_identity_filter(None)
        {}
    """
    if user_id is None or not str(user_id).strip():
        return {}

    literal = str(user_id).strip()
    lowered = literal.lower()

    alternatives: List[Dict[str, str]] = []
    for field in IDENTITY_FIELDS:
        alternatives.append({field: literal})
        alternatives.append({field: lowered})
    return {"$or": alternatives}


def build_order_filter(
    user_id: Optional[str] = None,
    trading_pair: Optional[str] = None,
    side: Optional[str] = None
) -> Dict[str, Any]:
    """Filter for order collections; applied unchanged to every lifecycle state."""
    query = build_identity_filter(user_id)

    if is_active(trading_pair):
        query["trading_pair.id"] = trading_pair.strip()

    if is_active(side):
        query["market_side"] = side.strip().lower()

    return query


def build_open_order_filter(
    user_id: Optional[str] = None,
    trading_pair: Optional[str] = None
) -> Dict[str, Any]:
    return build_order_filter(user_id=user_id, trading_pair=trading_pair)


def build_deposit_withdrawal_filter(
    user_id: Optional[str] = None,
    type: Optional[str] = None,
    currency: Optional[str] = None
) -> Dict[str, Any]:
    """
    Filter for deposits/withdrawals.

    ``type`` is lowercased ("Deposit" matches "deposit"); ``currency`` is
    compared as given since hex currency codes are uppercase.
    """
    query = build_identity_filter(user_id)

    if is_active(type):
        query["type"] = type.strip().lower()

    if is_active(currency):
        query["amount.currency"] = currency.strip()

    return query


def build_date_window_filter(
    field: str,
    start: Optional[str] = None,
    end: Optional[str] = None
) -> Dict[str, Any]:
    """
    Inclusive date window on one field.

    Raises:
        ValidationError: Unparseable bound or start after end
    """
    bounds: Dict[str, datetime] = {}

    if start:
        start_dt = parse_datetime(start)
        if start_dt is None:
            raise ValidationError(f"Invalid start date: {start}")
        bounds["$gte"] = start_dt

    if end:
        end_dt = parse_datetime(end)
        if end_dt is None:
            raise ValidationError(f"Invalid end date: {end}")
        bounds["$lte"] = end_dt

    if "$gte" in bounds and "$lte" in bounds and bounds["$gte"] > bounds["$lte"]:
        raise ValidationError("Start date must not be after end date")

    return {field: bounds} if bounds else {}


def build_user_scope_filters(user_id: Optional[str]) -> Dict[str, Dict[str, Any]]:
    """
    Dashboard stats filters restricted to one user.

    Users are matched on ``id``; transactions and trades through the
    identity aliases.
    """
    if user_id is None or not user_id.strip():
        return {"users": {}, "transactions": {}, "trades": {}}

    return {
        "users": {"id": user_id.strip()},
        "transactions": build_identity_filter(user_id),
        "trades": build_identity_filter(user_id),
    }
