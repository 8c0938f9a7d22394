"""
Configuration package for escmark

Provides application settings via environment variables using pydantic-settings.
"""

from .settings import appsettings, AppSettings, bundledProfilesDir_get

__all__ = ["appsettings", "AppSettings", "bundledProfilesDir_get"]
