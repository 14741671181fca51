"""
Quick Test Script

Runs a minimal check to verify the installation without running the
full demo. Good for checking that the API is reachable.
"""

import sys
import tempfile
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))


def test_imports():
    """Test that all modules can be imported."""
    print("Testing imports...")

    from network_demo.config import config
    print("  [OK] config")

    from network_demo.storage import PreferenceStore, TokenStore, ThemePreference
    print("  [OK] storage")

    from network_demo.api.errors import classify
    print("  [OK] api.errors")

    from network_demo.api.stages import AuthStage, LoggingStage
    print("  [OK] api.stages")

    from network_demo.api.client import APIClient
    print("  [OK] api.client")

    from network_demo.api.basic import fetch_posts_basic
    print("  [OK] api.basic")

    print("\nAll imports successful!")
    return True


def test_storage():
    """Test the token store in a temporary directory."""
    print("\nTesting token storage...")

    from network_demo.storage import PreferenceStore, TokenStore

    with tempfile.TemporaryDirectory() as tmp:
        tokens = TokenStore(PreferenceStore(Path(tmp) / "preferences.json"))
        tokens.save_demo_token()
        assert tokens.exists()
        tokens.clear()
        assert not tokens.exists()

    print("  [OK] Token saved and cleared")
    return True


def test_api():
    """Test API connection."""
    print("\nTesting API connection...")

    from network_demo.api import APIClient, ClassifiedError
    from network_demo.storage import PreferenceStore, TokenStore

    with tempfile.TemporaryDirectory() as tmp:
        tokens = TokenStore(PreferenceStore(Path(tmp) / "preferences.json"))
        with APIClient(token_store=tokens) as client:
            try:
                users = client.fetch_users()
                print(f"  [OK] Fetched {len(users)} users")
            except ClassifiedError as e:
                print(f"  [WARN] API unavailable [{e.category.value}]: {e.message}")

    return True


def main():
    """Run all quick tests."""
    print("=" * 50)
    print("Network Demo - Quick Test")
    print("=" * 50)

    try:
        test_imports()
        test_storage()
        test_api()

        print("\n" + "=" * 50)
        print("All tests passed! [OK]")
        print("=" * 50)

    except Exception as e:
        print(f"\n[FAIL] Test failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
