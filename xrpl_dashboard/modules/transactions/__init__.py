"""
Transactions Module

Ledger transaction listing, date range and creation.
"""

from xrpl_dashboard.modules.transactions.router import router

__all__ = ["router"]
