"""
Configuration package for inkline

Provides conversion settings via environment variables using pydantic-settings.
"""

from .settings import appsettings, InlineSettings

__all__ = ["appsettings", "InlineSettings"]
