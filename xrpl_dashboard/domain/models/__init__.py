"""Domain models for orders and ingestion documents."""

from xrpl_dashboard.domain.models.order import OrderSide, OrderStatus
from xrpl_dashboard.domain.models.documents import (
    Amount,
    DepositWithdrawalDocument,
    OrderDocument,
    TradeDocument,
    TransactionDocument,
    UserDocument,
)

__all__ = [
    "OrderSide",
    "OrderStatus",
    "Amount",
    "DepositWithdrawalDocument",
    "OrderDocument",
    "TradeDocument",
    "TransactionDocument",
    "UserDocument",
]
