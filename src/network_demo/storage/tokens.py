"""
Token Store Module

Persists a single bearer token in the preference store. Every storage
failure is logged and treated as "no token" / "write failed"; losing a
token only means logging in again.
"""

import logging
from typing import Optional

from .preferences import PreferenceStore


logger = logging.getLogger(__name__)


# Sample JWT used by the demo to simulate a logged-in user
DEMO_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkRlbW8gVXNlciIsImVtYWlsIjoiZGVtb0BleGFtcGxlLmNvbSIsInJvbGUiOiJ1c2VyIiwiaWF0IjoxNTE2MjM5MDIyfQ."
    "SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
)


class TokenStore:
    """
    Credential store for the bearer token.
    """

    def __init__(self, preferences: PreferenceStore, key: str = "auth_token"):
        """
        Initialize the token store.

        Args:
            preferences: Underlying key-value store.
            key: Preference key holding the token.
        """
        self.preferences = preferences
        self.key = key

    def get(self) -> Optional[str]:
        """
        Read the stored token.

        Returns:
            The token, or None if absent, empty or unreadable.
        """
        try:
            token = self.preferences.get(self.key)
        except Exception as e:
            logger.warning(f"Failed to read token: {e}")
            return None

        if not isinstance(token, str) or not token:
            return None
        return token

    def set(self, token: str) -> bool:
        """
        Persist a token. Empty tokens are rejected.

        Returns:
            True if the token was written, False otherwise.
        """
        if not token:
            logger.warning("Refusing to save an empty token")
            return False

        try:
            result = self.preferences.set(self.key, token)
        except Exception as e:
            logger.warning(f"Failed to save token: {e}")
            return False

        if result:
            logger.info("Token saved")
        else:
            logger.warning("Token could not be saved")
        return result

    def clear(self) -> bool:
        """
        Remove the stored token.

        Returns:
            True if the removal succeeded, False otherwise.
        """
        try:
            result = self.preferences.remove(self.key)
        except Exception as e:
            logger.warning(f"Failed to clear token: {e}")
            return False

        if result:
            logger.info("Token cleared")
        return result

    def exists(self) -> bool:
        """Check whether a non-empty token is stored."""
        return self.get() is not None

    def save_demo_token(self) -> bool:
        """Store the sample JWT, simulating a successful login."""
        return self.set(DEMO_TOKEN)
