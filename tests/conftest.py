"""Shared fixtures for owncast-ntfy tests."""

import httpx
import pytest
from owncast_ntfy.config import Settings
from owncast_ntfy.services.ntfy import NtfyClient


def make_settings(**overrides) -> Settings:
    values = dict(
        ntfy_url="https://ntfy.example.com/owncast",
        ntfy_server_url="https://ntfy.example.com",
        ntfy_topic="owncast",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def markdown_settings():
    return make_settings(markdown=True)


@pytest.fixture
def ntfy_requests():
    """Requests seen by the fake ntfy server."""
    return []


@pytest.fixture
def ntfy_status():
    """Status code the fake ntfy server answers with; tests may change it."""
    return {"code": 200}


@pytest.fixture
def ntfy_transport(ntfy_requests, ntfy_status):
    def handler(request: httpx.Request) -> httpx.Response:
        ntfy_requests.append(request)
        return httpx.Response(ntfy_status["code"], json={"id": "abc123"})

    return httpx.MockTransport(handler)


@pytest.fixture
def notifier(settings, ntfy_transport):
    return NtfyClient.from_settings(settings, transport=ntfy_transport)


@pytest.fixture
def events():
    """Representative Owncast webhook payloads keyed by event type."""
    return {
        "CHAT": {
            "type": "CHAT",
            "eventData": {
                "body": "<p>Hello <strong>world</strong></p>",
                "user": {"displayName": "Alice", "previousNames": ["Alice"]},
            },
        },
        "NAME_CHANGE": {
            "type": "NAME_CHANGE",
            "eventData": {
                "user": {"displayName": "Bob", "previousNames": ["quiet-owl", "Robert"]},
                "newName": "Bob",
            },
        },
        "USER_JOINED": {
            "type": "USER_JOINED",
            "eventData": {"user": {"displayName": "Alice", "previousNames": []}},
        },
        "USER_PARTED": {
            "type": "USER_PARTED",
            "eventData": {"user": {"displayName": "Alice", "previousNames": []}},
        },
        "STREAM_STARTED": {
            "type": "STREAM_STARTED",
            "eventData": {"streamTitle": "Friday Night Coding", "summary": "Live!"},
        },
        "STREAM_STOPPED": {
            "type": "STREAM_STOPPED",
            "eventData": {"streamTitle": "Friday Night Coding"},
        },
        "STREAM_TITLE_UPDATED": {
            "type": "STREAM_TITLE_UPDATED",
            "eventData": {"streamTitle": "Saturday Debugging"},
        },
    }
