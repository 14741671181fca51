"""
Tests for the Demo Orchestrator

Runs the full walkthrough against a mock server.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch

import httpx

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from network_demo.api import APIClient, Post
from network_demo.config import APIConfig
from network_demo.main import NetworkDemo
from network_demo.storage import PreferenceStore, TokenStore


USERS = [
    {"id": 1, "name": "Leanne Graham", "email": "leanne@example.com"},
    {"id": 2, "name": "Ervin Howell", "email": "ervin@example.com"},
]

POSTS = [{"userId": 1, "id": 1, "title": "t", "body": "b"}]


def jsonplaceholder(request: httpx.Request) -> httpx.Response:
    """Minimal stand-in for the JSONPlaceholder routes the demo uses."""
    if request.url.path == "/users":
        return httpx.Response(200, json=USERS)
    if request.url.path == "/users/1":
        return httpx.Response(200, json=USERS[0])
    if request.url.path == "/posts":
        return httpx.Response(200, json=POSTS)
    return httpx.Response(404)


@pytest.fixture
def preferences(tmp_path):
    """Create a PreferenceStore in a temporary directory."""
    return PreferenceStore(tmp_path / "preferences.json")


def build_demo(preferences, handler):
    api_config = APIConfig(base_url="https://api.test")
    api = APIClient(
        api_config,
        TokenStore(preferences),
        transport=httpx.MockTransport(handler),
    )
    return NetworkDemo(api_config=api_config, preferences=preferences, api=api)


class TestNetworkDemo:
    """Tests for the NetworkDemo walkthrough."""

    @patch("network_demo.main.fetch_posts_basic", return_value=[Post(1, "t", "b")])
    def test_successful_run(self, fetch_basic, preferences):
        """Test that every step succeeds against a healthy server."""
        demo = build_demo(preferences, jsonplaceholder)

        result = demo.run()

        assert result.success is True
        assert len(result.steps) == 6
        assert result.failed_steps == []
        assert demo.tokens.exists() is True
        assert demo.theme.load() is True
        fetch_basic.assert_called_once_with("https://api.test/posts", timeout=10.0)

    @patch("network_demo.main.fetch_posts_basic", return_value=[])
    def test_demo_token_reaches_injected_client(self, fetch_basic, preferences, tmp_path):
        """Test that the demo stores its token where the client reads it."""
        seen = []

        def handler(request):
            seen.append(request.headers.get("Authorization"))
            return jsonplaceholder(request)

        client_tokens = TokenStore(PreferenceStore(tmp_path / "client.json"))
        api = APIClient(
            APIConfig(base_url="https://api.test"),
            client_tokens,
            transport=httpx.MockTransport(handler),
        )
        demo = NetworkDemo(preferences=preferences, api=api)

        demo.run()

        assert demo.tokens is client_tokens
        assert client_tokens.exists() is True
        assert seen and all(value and value.startswith("Bearer ") for value in seen)

    @patch("network_demo.main.fetch_posts_basic", return_value=[])
    def test_failed_step_reports_classified_message(self, fetch_basic, preferences):
        """Test that a failing request is reported with its message."""

        def handler(request):
            if request.url.path == "/users":
                return httpx.Response(500)
            return jsonplaceholder(request)

        result = build_demo(preferences, handler).run()

        assert result.success is False
        failed = result.failed_steps
        assert len(failed) == 1
        assert failed[0].error == "Could not load the user list"

    @patch("network_demo.main.fetch_posts_basic", side_effect=RuntimeError("Status: 503"))
    def test_basic_transport_failure_does_not_stop_run(self, fetch_basic, preferences):
        """Test that later steps still run after a failure."""
        result = build_demo(preferences, jsonplaceholder).run()

        assert result.success is False
        assert result.steps[0].error == "Status: 503"
        assert all(step.success for step in result.steps[1:])


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
