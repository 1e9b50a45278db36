"""
Token and trading pair configuration tests.
"""

from xrpl_dashboard.config.trading import (
    TOKENS,
    currency_symbol,
    determine_market_side,
    find_trading_pair,
    is_supported_trading_pair,
    is_whitelisted_token,
)

RLUSD = TOKENS["RLUSD"].currency
SOLO = TOKENS["SOLO"].currency
CORE = TOKENS["CORE"].currency


def test_currency_symbol():
    assert currency_symbol(RLUSD) == "RLUSD"
    assert currency_symbol("XRP") == "XRP"
    assert currency_symbol("USD") == "USD"
    assert currency_symbol(None) == "Unknown"


def test_whitelisted_tokens():
    assert is_whitelisted_token("XRP")
    assert is_whitelisted_token(SOLO, "rIssuer")
    assert not is_whitelisted_token("USD", "rIssuer")


def test_supported_pairs_in_either_direction():
    assert is_supported_trading_pair("XRP", None, RLUSD, "rIssuer")
    assert is_supported_trading_pair(RLUSD, "rIssuer", "XRP", None)
    assert not is_supported_trading_pair(SOLO, "rA", CORE, "rB")


def test_find_trading_pair():
    assert find_trading_pair(SOLO, "rA", "XRP", None).id == "SOLO/XRP"
    assert find_trading_pair("USD", "rA", "XRP", None) is None


def test_determine_market_side():
    """Receiving the quote for the base is a BUY, the reverse a SELL"""
    assert determine_market_side("XRP/RLUSD", RLUSD, "XRP") == "BUY"
    assert determine_market_side("XRP/RLUSD", "XRP", RLUSD) == "SELL"
    assert determine_market_side("XRP/RLUSD", SOLO, "XRP") == "UNKNOWN"
    assert determine_market_side("BTC/XRP", SOLO, "XRP") == "UNKNOWN"
