"""
Typed views over the collections written by the ingestion pipeline.

Fields that hold dates or amounts are left loosely typed: the same field
can arrive as a datetime, an ISO string, a number or an extended-JSON
wrapper depending on which pipeline version wrote it.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from xrpl_dashboard.shared.models import DocumentView


class Amount(DocumentView):
    value: Optional[Any] = None
    currency: Optional[str] = None
    issuer: Optional[str] = None


class TradingPairRef(DocumentView):
    id: Optional[str] = None


class UserDocument(DocumentView):
    id: Optional[Any] = None
    wallets: List[Any] = Field(default_factory=list)


class TradeDocument(DocumentView):
    TakerGets: Optional[Amount] = None
    TakerPays: Optional[Amount] = None
    timestamp: Optional[Any] = None


class TransactionDocument(DocumentView):
    hash: Optional[str] = None
    txid: Optional[str] = None
    ledger_index: Optional[int] = None
    Account: Optional[str] = None
    Destination: Optional[str] = None
    user_id: Optional[str] = None
    TransactionType: Optional[str] = None
    trades: List[Dict[str, Any]] = Field(default_factory=list)
    created_date: Optional[Any] = None
    resolution_date: Optional[Any] = None
    close_time_iso: Optional[Any] = None
    createdAt: Optional[Any] = None


class OrderDocument(DocumentView):
    """Order in any lifecycle state; state-specific fields stay None elsewhere."""
    hash: Optional[str] = None
    account: Optional[str] = None
    sequence: Optional[int] = None
    user_id: Optional[str] = None
    status: Optional[str] = None
    market_side: Optional[str] = None
    trading_pair: Optional[TradingPairRef] = None
    original_amount: Optional[Any] = None
    price: Optional[Any] = None
    fee_xrp: Optional[Any] = None
    created_ledger_index: Optional[int] = None
    created_date: Optional[Any] = None
    # filled
    resolved_ledger_index: Optional[int] = None
    resolution_date: Optional[Any] = None
    filled_gets: Optional[Amount] = None
    filled_pays: Optional[Amount] = None
    executed_price: Optional[Any] = None
    executed_amount: Optional[Any] = None
    # canceled
    canceled_ledger_index: Optional[int] = None
    canceled_date: Optional[Any] = None
    cancel_tx_hash: Optional[str] = None


class DepositWithdrawalDocument(DocumentView):
    hash: Optional[str] = None
    user_id: Optional[str] = None
    type: Optional[str] = None
    amount: Optional[Amount] = None
    fee_xrp: Optional[Any] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    timestamp: Optional[Any] = None
    ledger_index: Optional[int] = None
