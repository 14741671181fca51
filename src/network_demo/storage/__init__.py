"""
Storage Module

Provides the preference store plus the token and theme stores built on it.
"""

from .preferences import PreferenceStore
from .tokens import TokenStore, DEMO_TOKEN
from .theme import ThemePreference

__all__ = ["PreferenceStore", "TokenStore", "ThemePreference", "DEMO_TOKEN"]
