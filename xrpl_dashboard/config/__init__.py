"""Configuration package for application settings, trading whitelist and database connections."""

from xrpl_dashboard.config.settings import settings, Settings, get_settings

__all__ = [
    "settings",
    "Settings",
    "get_settings",
]
