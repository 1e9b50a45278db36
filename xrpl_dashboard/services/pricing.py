"""
Executed price for filled orders.

The price is derived from the amounts actually exchanged (``filled_gets`` /
``filled_pays``). When exactly one leg is XRP the price is quoted as XRP per
unit of the other asset. Token/token fills fall back to a pair-specific rule
and then to the order side.
"""

from decimal import Decimal, InvalidOperation, DivisionByZero
from typing import Optional

from xrpl_dashboard.config.trading import NATIVE_CURRENCY, TOKENS
from xrpl_dashboard.domain.models.documents import Amount
from xrpl_dashboard.domain.models.order import OrderSide, OrderStatus
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

ZERO_PRICE = "0"

# XRP/RLUSD fills where RLUSD was received are quoted gets/pays
RLUSD_PAIR_ID = "XRP/RLUSD"


def _has_leg(amount: Optional[Amount]) -> bool:
    return (
        amount is not None
        and bool(amount.currency)
        and amount.value is not None
        and str(amount.value).strip() != ""
    )


def _divide(numerator: object, denominator: object) -> str:
    """
    Decimal division rendered as a string.

    Zero or unparseable operands give "0".
    """
    try:
        top = Decimal(str(numerator))
        bottom = Decimal(str(denominator))
        if bottom == 0 or not top.is_finite() or not bottom.is_finite():
            return ZERO_PRICE
        return str(top / bottom)
    except (InvalidOperation, DivisionByZero, ValueError) as e:
        logger.debug(f"Cannot compute price from {numerator!r}/{denominator!r}: {e}")
        return ZERO_PRICE


def derive_executed_price(
    status: OrderStatus,
    filled_gets: Optional[Amount],
    filled_pays: Optional[Amount],
    pair_id: Optional[str] = None,
    side: OrderSide = OrderSide.UNKNOWN
) -> Optional[str]:
    """
    Compute the executed price of a fill.

    Args:
        status: Order lifecycle state; only filled orders have a price
        filled_gets: Amount the order received
        filled_pays: Amount the order paid
        pair_id: Trading pair id, e.g. "XRP/RLUSD"
        side: Market side of the order

    Returns:
        Price as a decimal string, "0" for zero or bad amounts, or None
        when no price applies

    Example:
        >>> derive_executed_price(
        ...     OrderStatus.FILLED,
        ...     Amount(value="10", currency="XRP"),
        ...     Amount(value="50", currency="534F4C4F00000000000000000000000000000000"),
        ... )
        '5'
    """
    if status != OrderStatus.FILLED:
        return None
    if not _has_leg(filled_gets) or not _has_leg(filled_pays):
        return None

    gets_native = filled_gets.currency == NATIVE_CURRENCY
    pays_native = filled_pays.currency == NATIVE_CURRENCY

    if pays_native and not gets_native:
        return _divide(filled_pays.value, filled_gets.value)

    if gets_native and not pays_native:
        # Inverse of gets/pays
        return _divide(filled_pays.value, filled_gets.value)

    if pair_id == RLUSD_PAIR_ID and filled_gets.currency == TOKENS["RLUSD"].currency:
        return _divide(filled_gets.value, filled_pays.value)

    if side == OrderSide.BUY:
        return _divide(filled_pays.value, filled_gets.value)
    if side == OrderSide.SELL:
        return _divide(filled_gets.value, filled_pays.value)

    return None
