"""Shared fixtures: a file-backed token store and a scripted fake service.

The fake service is an ``httpx.MockTransport`` whose handler is chosen per
test, so no network is touched and every outgoing request is recorded.
"""

import httpx
import pytest
from msal_extensions import FilePersistence

from otlub_client import sdk
from otlub_client.auth import TokenStore
from otlub_client.config import SdkConfig
from otlub_client.sdk import build_service

BASE_URL = "https://api.example.test"


def envelope(data, status=200, message=None, timestamp="2024-01-01T00:00:00Z"):
    return {"data": data, "status": status, "message": message, "timestamp": timestamp}


def user_payload(user_id="u1", email="a@b.com"):
    return {
        "id": user_id,
        "email": email,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "phone": None,
        "avatar": None,
        "isActive": True,
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-02T00:00:00Z",
    }


class FakeService:
    """Routes requests to ``(method, path)`` handlers and records them."""

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def on(self, method, path, handler):
        self.routes[(method, path)] = handler

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404)
        result = handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def reset_singleton():
    sdk.destroy()
    yield
    sdk.destroy()


@pytest.fixture
def token_path(tmp_path):
    return str(tmp_path / "otlub_sdk" / "auth_token")


@pytest.fixture
def token_store(token_path):
    return TokenStore.at_path(token_path)


@pytest.fixture
def config(token_path):
    return SdkConfig(base_url=BASE_URL, token_cache_path=token_path)


@pytest.fixture
def fake():
    return FakeService()


@pytest.fixture
async def service(config, fake, token_store):
    svc = build_service(config, transport=httpx.MockTransport(fake), token_store=token_store)
    yield svc
    await svc.aclose()


@pytest.fixture
def file_persistence(tmp_path):
    return FilePersistence(str(tmp_path / "raw_token"))
