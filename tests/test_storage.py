"""
Tests for Storage Modules

Tests for the preference store, the token store and the theme preference.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from network_demo.storage import PreferenceStore, TokenStore, ThemePreference, DEMO_TOKEN


@pytest.fixture
def preferences(tmp_path):
    """Create a PreferenceStore in a temporary directory."""
    return PreferenceStore(tmp_path / "prefs" / "preferences.json")


class TestPreferenceStore:
    """Tests for the JSON-file preference store."""

    def test_missing_key_returns_none(self, preferences):
        """Test reading a key that was never written."""
        assert preferences.get("anything") is None

    def test_set_and_get(self, preferences):
        """Test that values round-trip through the file."""
        assert preferences.set("name", "value") is True
        assert preferences.set("flag", True) is True

        assert preferences.get("name") == "value"
        assert preferences.get("flag") is True

    def test_values_persist_across_instances(self, preferences):
        """Test that a second store on the same file sees the data."""
        preferences.set("name", "value")

        other = PreferenceStore(preferences.path)
        assert other.get("name") == "value"

    def test_remove(self, preferences):
        """Test removing a key."""
        preferences.set("name", "value")

        assert preferences.remove("name") is True
        assert preferences.get("name") is None

    def test_remove_absent_key_succeeds(self, preferences):
        """Test that removing an unknown key is not an error."""
        assert preferences.remove("never-set") is True

    def test_set_reports_write_failure(self, tmp_path):
        """Test that an unwritable location returns False instead of raising."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = PreferenceStore(blocker / "preferences.json")

        assert store.set("name", "value") is False

    def test_corrupted_file_raises_on_read(self, tmp_path):
        """Test that a corrupted file is reported to the caller."""
        path = tmp_path / "preferences.json"
        path.write_text("{not json")
        store = PreferenceStore(path)

        with pytest.raises(ValueError):
            store.get("name")


class TestTokenStore:
    """Tests for the bearer token store."""

    @pytest.fixture
    def tokens(self, preferences):
        """Create a TokenStore over a temporary preference file."""
        return TokenStore(preferences)

    @pytest.mark.parametrize("token", ["abc", "Bearer-looking token", DEMO_TOKEN, "ü"])
    def test_set_then_get(self, tokens, token):
        """Test that any non-empty token round-trips."""
        assert tokens.set(token) is True
        assert tokens.get() == token
        assert tokens.exists() is True

    def test_clear_then_get(self, tokens):
        """Test that clearing removes the token."""
        tokens.set("abc")

        assert tokens.clear() is True
        assert tokens.get() is None
        assert tokens.exists() is False

    def test_get_without_token(self, tokens):
        """Test reading before anything was stored."""
        assert tokens.get() is None
        assert tokens.exists() is False

    def test_empty_token_rejected(self, tokens):
        """Test that an empty token is refused and the old token kept."""
        tokens.set("previous")

        assert tokens.set("") is False
        assert tokens.get() == "previous"

    def test_empty_token_rejected_without_previous(self, tokens, preferences):
        """Test that an empty token is never written."""
        assert tokens.set("") is False
        assert preferences.get("auth_token") is None

    def test_stored_empty_string_reads_as_absent(self, tokens, preferences):
        """Test that an empty value written by someone else counts as no token."""
        preferences.set("auth_token", "")

        assert tokens.get() is None
        assert tokens.exists() is False

    def test_custom_key(self, preferences):
        """Test that the store uses its configured key."""
        tokens = TokenStore(preferences, key="session")
        tokens.set("abc")

        assert preferences.get("session") == "abc"

    def test_read_failure_is_fail_open(self):
        """Test that a storage error reads as no token."""
        broken = Mock()
        broken.get.side_effect = OSError("disk on fire")
        tokens = TokenStore(broken)

        assert tokens.get() is None
        assert tokens.exists() is False

    def test_corrupted_file_is_fail_open(self, tmp_path):
        """Test that a corrupted preference file reads as no token."""
        path = tmp_path / "preferences.json"
        path.write_text("{not json")
        tokens = TokenStore(PreferenceStore(path))

        assert tokens.get() is None

    def test_write_failure_returns_false(self):
        """Test that storage errors on write are reported as False."""
        broken = Mock()
        broken.set.side_effect = OSError("read-only")
        broken.remove.side_effect = OSError("read-only")
        tokens = TokenStore(broken)

        assert tokens.set("abc") is False
        assert tokens.clear() is False

    def test_unsuccessful_write_is_reported(self):
        """Test that a store returning False is passed through."""
        store = Mock()
        store.set.return_value = False
        tokens = TokenStore(store)

        assert tokens.set("abc") is False

    def test_save_demo_token(self, tokens):
        """Test storing the sample JWT."""
        assert tokens.save_demo_token() is True
        assert tokens.get() == DEMO_TOKEN


class TestThemePreference:
    """Tests for the dark-mode flag."""

    @pytest.fixture
    def theme(self, preferences):
        """Create a ThemePreference over a temporary preference file."""
        return ThemePreference(preferences)

    def test_defaults_to_light_mode(self, theme):
        """Test that nothing stored means light mode."""
        assert theme.load() is False

    def test_save_and_load(self, theme):
        """Test persisting dark mode."""
        assert theme.save(True) is True
        assert theme.load() is True

    def test_toggle(self, theme, preferences):
        """Test toggling flips and persists the flag."""
        assert theme.toggle() is True
        assert preferences.get("isDarkMode") is True

        assert theme.toggle() is False
        assert theme.load() is False

    def test_non_bool_value_is_ignored(self, theme, preferences):
        """Test that an unexpected stored value falls back to light mode."""
        preferences.set("isDarkMode", "yes")

        assert theme.load() is False

    def test_load_failure_defaults_to_light(self):
        """Test that storage errors fall back to light mode."""
        broken = Mock()
        broken.get.side_effect = OSError("unreadable")

        assert ThemePreference(broken).load() is False

    def test_save_failure_returns_false(self):
        """Test that storage errors on save are reported as False."""
        broken = Mock()
        broken.set.side_effect = OSError("read-only")

        assert ThemePreference(broken).save(True) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
