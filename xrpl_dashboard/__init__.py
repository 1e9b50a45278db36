"""XRPL liquidity-mining dashboard API."""
