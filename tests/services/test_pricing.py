"""
Executed price tests.
"""

import pytest

from xrpl_dashboard.domain.models.documents import Amount
from xrpl_dashboard.domain.models.order import OrderSide, OrderStatus
from xrpl_dashboard.services.pricing import derive_executed_price

RLUSD = "524C555344000000000000000000000000000000"
SOLO = "534F4C4F00000000000000000000000000000000"
CORE = "434F524500000000000000000000000000000000"


# ==================== XRP LEG TESTS ====================

def test_price_when_order_received_xrp():
    """XRP received, token paid: pays/gets"""
    price = derive_executed_price(
        OrderStatus.FILLED,
        Amount(value="10", currency="XRP"),
        Amount(value="50", currency=SOLO),
    )
    assert price == "5"


def test_price_when_order_paid_xrp():
    """XRP paid, token received: pays/gets"""
    price = derive_executed_price(
        OrderStatus.FILLED,
        Amount(value="40", currency=SOLO),
        Amount(value="10", currency="XRP"),
    )
    assert price == "0.25"


def test_price_is_decimal_exact():
    """Decimal arithmetic avoids binary float artefacts"""
    price = derive_executed_price(
        OrderStatus.FILLED,
        Amount(value="0.3", currency="XRP"),
        Amount(value="0.1", currency=SOLO),
    )
    assert price.startswith("0.3333333333")


# ==================== FALLBACK TESTS ====================

def test_price_only_for_filled_orders():
    """Open and cancelled orders have no executed price"""
    gets = Amount(value="10", currency="XRP")
    pays = Amount(value="50", currency=SOLO)

    assert derive_executed_price(OrderStatus.OPEN, gets, pays) is None
    assert derive_executed_price(OrderStatus.CANCELLED, gets, pays) is None


def test_price_missing_leg_is_none():
    assert derive_executed_price(OrderStatus.FILLED, None, Amount(value="1", currency="XRP")) is None
    assert derive_executed_price(
        OrderStatus.FILLED,
        Amount(value="", currency="XRP"),
        Amount(value="1", currency=SOLO),
    ) is None


@pytest.mark.parametrize("gets_value,pays_value", [("0", "50"), ("abc", "50"), ("10", "0")])
def test_price_zero_or_bad_amounts_give_zero(gets_value, pays_value):
    """Division by zero and unparseable amounts give "0" """
    price = derive_executed_price(
        OrderStatus.FILLED,
        Amount(value=gets_value, currency="XRP"),
        Amount(value=pays_value, currency=SOLO),
    )
    assert price == "0"


def test_token_pair_rlusd_rule():
    """RLUSD received on the XRP/RLUSD pair: gets/pays"""
    price = derive_executed_price(
        OrderStatus.FILLED,
        Amount(value="30", currency=RLUSD),
        Amount(value="60", currency=CORE),
        pair_id="XRP/RLUSD",
    )
    assert price == "0.5"


def test_token_pair_uses_side():
    """Without an XRP leg, BUY gives pays/gets and SELL gives gets/pays"""
    gets = Amount(value="20", currency=CORE)
    pays = Amount(value="5", currency=SOLO)

    assert derive_executed_price(OrderStatus.FILLED, gets, pays, side=OrderSide.BUY) == "0.25"
    assert derive_executed_price(OrderStatus.FILLED, gets, pays, side=OrderSide.SELL) == "4"
    assert derive_executed_price(OrderStatus.FILLED, gets, pays, side=OrderSide.UNKNOWN) is None
