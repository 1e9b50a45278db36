"""
MongoDB Tool Module

Database inspection and the generic query tool used by operators.
"""

from xrpl_dashboard.modules.mongodb.router import router, info_router

__all__ = ["router", "info_router"]
