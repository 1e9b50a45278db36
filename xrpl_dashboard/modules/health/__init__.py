"""
Health Module
"""

from xrpl_dashboard.modules.health.router import router

__all__ = ["router"]
