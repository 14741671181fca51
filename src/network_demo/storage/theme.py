"""
Theme Preference Module

Remembers whether dark mode is enabled.
"""

import logging

from .preferences import PreferenceStore


logger = logging.getLogger(__name__)


class ThemePreference:
    """Persisted dark-mode flag; light mode is the default."""

    def __init__(self, preferences: PreferenceStore, key: str = "isDarkMode"):
        self.preferences = preferences
        self.key = key

    def load(self) -> bool:
        """Load the flag, falling back to light mode on any error."""
        try:
            value = self.preferences.get(self.key)
        except Exception as e:
            logger.warning(f"Failed to load theme preference: {e}")
            return False

        return value if isinstance(value, bool) else False

    def save(self, is_dark_mode: bool) -> bool:
        try:
            result = self.preferences.set(self.key, bool(is_dark_mode))
        except Exception as e:
            logger.warning(f"Failed to save theme preference: {e}")
            return False

        if result:
            logger.info(f"Theme saved: {'dark' if is_dark_mode else 'light'} mode")
        return result

    def toggle(self) -> bool:
        """
        Flip the flag and persist it.

        Returns:
            The new value.
        """
        is_dark_mode = not self.load()
        self.save(is_dark_mode)
        return is_dark_mode
