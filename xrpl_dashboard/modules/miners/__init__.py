"""
Miners Module

Per-miner order history, open orders and deposit/withdrawal history.
"""

from xrpl_dashboard.modules.miners.router import router

__all__ = ["router"]
