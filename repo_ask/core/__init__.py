"""
Core Module - Configuration, dependency wiring and exceptions.
"""

from repo_ask.core.config import Settings, get_settings
from repo_ask.core.exceptions import AppException, ConfigurationError

__all__ = [
    "Settings",
    "get_settings",
    "AppException",
    "ConfigurationError",
]
