"""
Result shapers.

Turn raw ingestion documents into the stable shapes the dashboard renders.
Shapers never raise on partial or malformed documents: every output field
falls back to a typed default.
"""

import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from xrpl_dashboard.config.trading import currency_symbol
from xrpl_dashboard.core.responses import to_json_safe
from xrpl_dashboard.domain.models.documents import (
    Amount,
    DepositWithdrawalDocument,
    OrderDocument,
    TradeDocument,
    TransactionDocument,
    UserDocument,
)
from xrpl_dashboard.domain.models.order import OrderSide, OrderStatus, status_from_document
from xrpl_dashboard.services.pricing import derive_executed_price
from xrpl_dashboard.utils.dates import (
    is_extended_json_date,
    parse_datetime,
    parse_extended_json_date,
    to_iso,
    utc_now,
)
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

UNKNOWN = "Unknown"


def _is_plain_date(value: Any) -> bool:
    """Plain date candidate: a datetime or a non-empty string."""
    return isinstance(value, datetime) or (isinstance(value, str) and bool(value))


def _parsed_or_now(value: Optional[datetime], source: str) -> datetime:
    if value is None:
        logger.error(f"Error parsing transaction date from {source}, using current time")
        return utc_now()
    return value


def extract_transaction_date(document: Dict[str, Any]) -> datetime:
    """
    Date a transaction is attributed to.

    Candidates in priority order:
        1. ``created_date`` as a ``{"$date": ...}`` wrapper
        2. ``resolution_date`` as a wrapper
        3. ``created_date`` as a datetime or string
        4. ``resolution_date`` as a datetime or string
        5. first trade's ``timestamp`` (wrapper, then plain)
        6. ``close_time_iso``
        7. ``createdAt``

    The first matching candidate decides; if its value cannot be parsed the
    current time is used. With no candidate the current time is used and the
    document keys are logged.

    Returns:
        datetime: Timezone-aware UTC datetime
    """
    tx = TransactionDocument.from_document(document)

    if is_extended_json_date(tx.created_date):
        return _parsed_or_now(parse_extended_json_date(tx.created_date), "created_date")

    if is_extended_json_date(tx.resolution_date):
        return _parsed_or_now(parse_extended_json_date(tx.resolution_date), "resolution_date")

    if _is_plain_date(tx.created_date):
        return _parsed_or_now(parse_datetime(tx.created_date), "created_date")

    if _is_plain_date(tx.resolution_date):
        return _parsed_or_now(parse_datetime(tx.resolution_date), "resolution_date")

    if tx.trades:
        timestamp = tx.trades[0].get("timestamp") if isinstance(tx.trades[0], dict) else None
        if is_extended_json_date(timestamp):
            return _parsed_or_now(parse_extended_json_date(timestamp), "trades[0].timestamp")
        if _is_plain_date(timestamp):
            return _parsed_or_now(parse_datetime(timestamp), "trades[0].timestamp")

    if isinstance(tx.close_time_iso, str) and tx.close_time_iso:
        return _parsed_or_now(parse_datetime(tx.close_time_iso), "close_time_iso")

    if _is_plain_date(tx.createdAt):
        return _parsed_or_now(parse_datetime(tx.createdAt), "createdAt")

    logger.warning(
        "No valid date field found in transaction. Available keys: %s",
        ", ".join(str(key) for key in (document or {}).keys()),
    )
    return utc_now()


def coerce_date(value: Any) -> Optional[datetime]:
    """Parse a plain or wrapped date value; None when absent or unparseable."""
    if is_extended_json_date(value):
        return parse_extended_json_date(value)
    return parse_datetime(value)


def _text(value: Any, default: Optional[str]) -> Optional[str]:
    """Render a scalar as text, keeping integral floats free of ".0"."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if not math.isfinite(value):
            return default
        if value.is_integer():
            return str(int(value))
    if isinstance(value, (dict, list)):
        return default
    return str(value)


def _first_date(*values: Any) -> datetime:
    for value in values:
        if value is None or value == "":
            continue
        parsed = coerce_date(value)
        if parsed is not None:
            return parsed
    return utc_now()


def shape_order(
    document: Dict[str, Any],
    status: Optional[OrderStatus] = None
) -> Dict[str, Any]:
    """
    Shape a filled, canceled or open order.

    Args:
        document: Raw order document
        status: Lifecycle state implied by the source collection; the
            document's own ``status`` field is used when omitted

    Returns:
        Dict with orderId, account, pair, side, originalAmount, price, amount,
        filledAmount, executedPrice, status, date, fee and rawData
    """
    order = OrderDocument.from_document(document)
    state = status or status_from_document(order.status)
    side = OrderSide.parse(order.market_side)
    pair_id = order.trading_pair.id if order.trading_pair and order.trading_pair.id else None

    executed_price = _text(order.executed_price, None)
    if executed_price is None:
        executed_price = derive_executed_price(
            state,
            order.filled_gets,
            order.filled_pays,
            pair_id=pair_id,
            side=side,
        )

    original_amount = _text(order.original_amount, "0")

    return {
        "orderId": order.hash or UNKNOWN,
        "account": order.account or UNKNOWN,
        "pair": pair_id or "Unknown/Unknown",
        "side": side.value,
        "originalAmount": original_amount,
        "price": _text(order.price, "0"),
        "amount": original_amount,
        "filledAmount": _text(order.executed_amount, None),
        "executedPrice": executed_price,
        "status": state.label,
        "date": to_iso(_first_date(order.resolution_date, order.canceled_date, order.created_date)),
        "fee": _text(order.fee_xrp, "0"),
        "rawData": to_json_safe(document or {}),
    }


def shape_open_order(document: Dict[str, Any]) -> Dict[str, Any]:
    """Open orders are returned as stored, made JSON-safe."""
    return to_json_safe(document or {})


def shape_deposit_withdrawal(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shape a deposit or withdrawal record.

    Defaults: "Unknown" for identifiers and addresses, "0" for amounts,
    "XRP" for currency, 0 for ledger index, current time for timestamp.
    """
    record = DepositWithdrawalDocument.from_document(document)
    amount = record.amount or Amount()
    timestamp = coerce_date(record.timestamp) if record.timestamp else None

    return {
        "id": _text(record.object_id, None) or record.hash or UNKNOWN,
        "userId": record.user_id or UNKNOWN,
        "type": record.type or UNKNOWN,
        "amount": _text(amount.value, "0"),
        "currency": amount.currency or "XRP",
        "fee": _text(record.fee_xrp, "0"),
        "fromAddress": record.from_address or UNKNOWN,
        "toAddress": record.to_address or UNKNOWN,
        "timestamp": to_iso(timestamp or utc_now()),
        "hash": record.hash or UNKNOWN,
        "ledgerIndex": record.ledger_index or 0,
        "rawData": to_json_safe(document or {}),
    }


def _to_float(value: Any) -> float:
    """Numeric value of an amount; non-numeric values count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value))
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _trade_volume(trade: TradeDocument) -> float:
    if trade.TakerGets and trade.TakerGets.value:
        return _to_float(trade.TakerGets.value)
    if trade.TakerPays and trade.TakerPays.value:
        return _to_float(trade.TakerPays.value)
    return 0.0


def _trade_asset(trade: TradeDocument) -> str:
    if trade.TakerGets and trade.TakerGets.currency:
        return trade.TakerGets.currency
    if trade.TakerPays and trade.TakerPays.currency:
        return trade.TakerPays.currency
    return UNKNOWN


def compute_dashboard_stats(
    users: Iterable[Dict[str, Any]],
    transaction_count: int,
    trades: Iterable[Dict[str, Any]]
) -> Dict[str, Any]:
    """
    Aggregate dashboard metrics.

    Volume counts ``TakerGets.value`` when present, else ``TakerPays.value``.
    Per-asset volume is keyed by the raw currency code; ``assetSymbols`` maps
    each code to its display symbol.
    """
    user_views: List[UserDocument] = [UserDocument.from_document(user) for user in users]
    trade_views: List[TradeDocument] = [TradeDocument.from_document(trade) for trade in trades]

    wallets = set()
    for user in user_views:
        for wallet in user.wallets:
            if isinstance(wallet, str) and wallet:
                wallets.add(wallet)

    total_volume = sum(_trade_volume(trade) for trade in trade_views)

    asset_volumes: Dict[str, float] = {}
    for trade in trade_views:
        asset = _trade_asset(trade)
        asset_volumes.setdefault(asset, 0.0)
        if trade.TakerGets and trade.TakerGets.value and trade.TakerGets.currency == asset:
            asset_volumes[asset] += _to_float(trade.TakerGets.value)
        elif trade.TakerPays and trade.TakerPays.value and trade.TakerPays.currency == asset:
            asset_volumes[asset] += _to_float(trade.TakerPays.value)

    return {
        "userCount": len(user_views),
        "walletCount": len(wallets),
        "transactionCount": transaction_count,
        "totalVolume": total_volume,
        "assetVolumes": asset_volumes,
        "assetSymbols": {asset: currency_symbol(asset) for asset in asset_volumes},
    }


def transaction_date_range(documents: Iterable[Dict[str, Any]]) -> Dict[str, datetime]:
    """
    Earliest and latest attributed dates across transactions.

    Both bounds are the current time when there are no documents.
    """
    dates = sorted(extract_transaction_date(document) for document in documents)
    if not dates:
        now = utc_now()
        return {"minDate": now, "maxDate": now}
    return {"minDate": dates[0], "maxDate": dates[-1]}
