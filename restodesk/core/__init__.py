"""
Core module initialization.
Exports configuration, logging and token utilities.
"""

from restodesk.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from restodesk.core.security import AuthError, create_access_token, verify_token

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "AuthError",
    "create_access_token",
    "verify_token",
]
