"""
Dashboard Module

Program-wide metrics: users, wallets, transactions and trade volume.
"""

from xrpl_dashboard.modules.dashboard.router import router

__all__ = ["router"]
