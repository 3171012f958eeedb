"""Shared test fixtures"""

import httpx
import pytest
from fastapi.testclient import TestClient

from nim_proxy.api import create_app
from nim_proxy.models.config import ProxyConfig, UpstreamConfig


TEST_API_KEY = "nvapi-test-secret-key"
TEST_API_BASE = "https://nim.example.test/v1"


def upstream_response(status_code: int, payload) -> httpx.Response:
    """Build a real httpx response as if returned by the upstream"""
    return httpx.Response(
        status_code,
        json=payload,
        request=httpx.Request("POST", f"{TEST_API_BASE}/chat/completions"),
    )


@pytest.fixture
def config():
    """Configuration with a credential"""
    return ProxyConfig(
        upstream=UpstreamConfig(api_key=TEST_API_KEY, api_base=TEST_API_BASE)
    )


@pytest.fixture
def client(config):
    """Create a test client"""
    return TestClient(create_app(config))


@pytest.fixture
def unconfigured_client():
    """Test client for a deployment without a credential"""
    return TestClient(create_app(ProxyConfig()))


@pytest.fixture
def mock_upstream_payload():
    """Mock upstream API response"""
    return {
        "id": "nim-abc123",
        "object": "chat.completion",
        "created": 1677652288,
        "model": "deepseek-ai/deepseek-v3.1",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": "Hello! How can I help you today?"
                },
                "finish_reason": "stop"
            }
        ],
        "usage": {
            "prompt_tokens": 10,
            "completion_tokens": 9,
            "total_tokens": 19
        }
    }
