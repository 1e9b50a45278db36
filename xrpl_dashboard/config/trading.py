"""
Supported tokens and trading pairs.

Non-XRP currencies are stored by the ledger as 40-character hex codes; the
dashboard maps them back to display symbols here.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

NATIVE_CURRENCY = "XRP"


@dataclass(frozen=True)
class Token:
    """Token currency identifier (hex code for non-XRP tokens) and display symbol."""
    currency: str
    symbol: str


@dataclass(frozen=True)
class TradingPair:
    """Pair id such as "XRP/RLUSD" with its base and quote token."""
    id: str
    base_token: Token
    quote_token: Token


TOKENS: Dict[str, Token] = {
    "XRP": Token(currency="XRP", symbol="XRP"),
    "RLUSD": Token(currency="524C555344000000000000000000000000000000", symbol="RLUSD"),
    "SOLO": Token(currency="534F4C4F00000000000000000000000000000000", symbol="SOLO"),
    "CORE": Token(currency="434F524500000000000000000000000000000000", symbol="CORE"),
}

TRADING_PAIRS: List[TradingPair] = [
    TradingPair(id="XRP/RLUSD", base_token=TOKENS["XRP"], quote_token=TOKENS["RLUSD"]),
    TradingPair(id="CORE/XRP", base_token=TOKENS["CORE"], quote_token=TOKENS["XRP"]),
    TradingPair(id="SOLO/XRP", base_token=TOKENS["SOLO"], quote_token=TOKENS["XRP"]),
]


def find_token(currency: Optional[str]) -> Optional[Token]:
    """Token whose currency code matches, if whitelisted."""
    if not currency:
        return None
    for token in TOKENS.values():
        if token.currency == currency:
            return token
    return None


def currency_symbol(currency: Optional[str]) -> str:
    """
    Display symbol for a currency code.

    Example:
        >>> currency_symbol("524C555344000000000000000000000000000000")
        'RLUSD'
        >>> currency_symbol("USD")
        'USD'
    """
    token = find_token(currency)
    if token:
        return token.symbol
    return currency or "Unknown"


def is_whitelisted_token(currency: str, issuer: Optional[str] = None) -> bool:
    """
    Determine if a token is whitelisted.

    Issuers are not validated for issued tokens; different issuers may share a
    currency code.
    """
    if currency == NATIVE_CURRENCY and not issuer:
        return True
    return find_token(currency) is not None


def _pair_matches(pair: TradingPair, first: Token, second: Token) -> bool:
    return (
        (pair.base_token.symbol == first.symbol and pair.quote_token.symbol == second.symbol)
        or (pair.base_token.symbol == second.symbol and pair.quote_token.symbol == first.symbol)
    )


def is_supported_trading_pair(
    currency1: str,
    issuer1: Optional[str],
    currency2: str,
    issuer2: Optional[str]
) -> bool:
    """Check a currency pair against the whitelist, in either direction."""
    if not is_whitelisted_token(currency1, issuer1) or not is_whitelisted_token(currency2, issuer2):
        return False

    token1 = find_token(currency1)
    token2 = find_token(currency2)
    if not token1 or not token2:
        logger.debug(f"Trading pair not supported: token(s) not found for currencies: {currency1}, {currency2}")
        return False

    supported = any(_pair_matches(pair, token1, token2) for pair in TRADING_PAIRS)
    if not supported:
        logger.debug(f"Trading pair not supported: {token1.symbol}/{token2.symbol} is not in whitelist")
    return supported


def find_trading_pair(
    currency1: str,
    issuer1: Optional[str],
    currency2: str,
    issuer2: Optional[str]
) -> Optional[TradingPair]:
    """Find the whitelisted pair formed by two currencies."""
    token1 = find_token(currency1)
    token2 = find_token(currency2)
    if not token1 or not token2:
        return None
    for pair in TRADING_PAIRS:
        if _pair_matches(pair, token1, token2):
            return pair
    return None


def get_trading_pair(pair_id: Optional[str]) -> Optional[TradingPair]:
    for pair in TRADING_PAIRS:
        if pair.id == pair_id:
            return pair
    return None


def determine_market_side(
    pair_id: str,
    taker_gets_currency: str,
    taker_pays_currency: str
) -> str:
    """
    Determine market side for a pair.

    Sides follow the offer owner: in XRP/RLUSD an offer with TakerGets in
    RLUSD and TakerPays in XRP gives RLUSD to receive XRP, a BUY of the base.
    The reverse is a SELL.

    Returns:
        str: "BUY", "SELL" or "UNKNOWN"
    """
    pair = get_trading_pair(pair_id)
    if not pair:
        return "UNKNOWN"

    gets_token = find_token(taker_gets_currency)
    pays_token = find_token(taker_pays_currency)
    if not gets_token or not pays_token:
        return "UNKNOWN"

    base_symbol = pair.base_token.symbol
    quote_symbol = pair.quote_token.symbol

    if gets_token.symbol == quote_symbol and pays_token.symbol == base_symbol:
        return "BUY"
    if gets_token.symbol == base_symbol and pays_token.symbol == quote_symbol:
        return "SELL"
    return "UNKNOWN"
