"""
Order Domain Model

Order lifecycle states and where each state is stored.
No database access here - use OrderRepository for queries.
"""

from enum import Enum
from typing import FrozenSet, Optional

from xrpl_dashboard.domain import collections
from xrpl_dashboard.shared.exceptions import ValidationError


ALL_SENTINEL = "ALL"


# ==================== ENUMS ====================

class OrderStatus(str, Enum):
    """Order lifecycle state"""
    OPEN = "open"
    FILLED = "filled"
    CANCELLED = "cancelled"

    @property
    def collection(self) -> str:
        """Collection holding orders in this state."""
        return _STATUS_COLLECTIONS[self]

    @property
    def date_field(self) -> str:
        """Field recording when the order entered this state."""
        return _STATUS_DATE_FIELDS[self]

    @property
    def label(self) -> str:
        """Display label used in shaped orders."""
        return _STATUS_LABELS[self]


class OrderSide(str, Enum):
    """Order side"""
    BUY = "BUY"
    SELL = "SELL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "OrderSide":
        if not value:
            return cls.UNKNOWN
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


_STATUS_COLLECTIONS = {
    OrderStatus.OPEN: collections.OPEN_ORDERS,
    OrderStatus.FILLED: collections.FILLED_ORDERS,
    OrderStatus.CANCELLED: collections.CANCELED_ORDERS,
}

_STATUS_DATE_FIELDS = {
    OrderStatus.OPEN: "created_date",
    OrderStatus.FILLED: "resolution_date",
    OrderStatus.CANCELLED: "canceled_date",
}

_STATUS_LABELS = {
    OrderStatus.OPEN: "Open",
    OrderStatus.FILLED: "Filled",
    OrderStatus.CANCELLED: "Cancelled",
}

# Order history covers resolved orders only
HISTORY_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.FILLED, OrderStatus.CANCELLED})


def status_from_document(raw_status: Optional[str]) -> OrderStatus:
    """
    Lifecycle state recorded on a stored order.

    The pipeline writes "filled" and "canceled"; anything else is open.
    """
    value = (raw_status or "").lower()
    if value == "filled":
        return OrderStatus.FILLED
    if value in ("canceled", "cancelled"):
        return OrderStatus.CANCELLED
    return OrderStatus.OPEN


def parse_history_status(status: Optional[str]) -> FrozenSet[OrderStatus]:
    """
    Turn the order-history status parameter into the states to query.

    Example:
        >>> parse_history_status("Filled")
        frozenset({<OrderStatus.FILLED: 'filled'>})
        >>> parse_history_status(None) == HISTORY_STATUSES
        True

    Raises:
        ValidationError: Unknown status value
    """
    if status is None or not status.strip() or status.strip().upper() == ALL_SENTINEL:
        return HISTORY_STATUSES

    value = status.strip().lower()
    if value == "filled":
        return frozenset({OrderStatus.FILLED})
    if value in ("cancelled", "canceled"):
        return frozenset({OrderStatus.CANCELLED})

    raise ValidationError(f"Invalid status: {status}. Expected Filled, Cancelled or ALL")
