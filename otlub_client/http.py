from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import quote

import httpx

from otlub_client.config import SdkConfig
from otlub_client.endpoints import Endpoint
from otlub_client.errors import EnvelopeError, ProtocolError, TransportError
from otlub_client.logging_utils import build_debug_hooks
from otlub_client.models import Envelope, Failure, Outcome, Success

T = TypeVar("T")

logger = logging.getLogger(__name__)


def build_async_client(
    config: SdkConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    headers: dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if config.api_key:
        headers["X-API-Key"] = config.api_key

    return httpx.AsyncClient(
        base_url=config.base_url + "/",
        headers=headers,
        timeout=httpx.Timeout(config.timeout_seconds),
        event_hooks=build_debug_hooks(logger) if config.debug else None,
        transport=transport,
    )


def _decode_unit(_: Any) -> None:
    return None


class RequestExecutor:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def execute(
        self,
        endpoint: Endpoint,
        decode: Callable[[Any], T] = _decode_unit,
        *,
        path_params: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
        token: str | None = None,
    ) -> Outcome[T]:
        try:
            path = endpoint.format_path(
                {key: quote(str(value), safe="") for key, value in (path_params or {}).items()}
            )
        except (KeyError, IndexError) as exc:
            return Failure(TransportError(f"{endpoint.name}: missing path parameter {exc}"))

        request_kwargs: dict[str, Any] = {}
        if endpoint.has_query:
            request_kwargs["params"] = dict(query or {}) or None
        if endpoint.has_body:
            request_kwargs["json"] = dict(body or {})
        if token:
            request_kwargs["headers"] = {"Authorization": f"Bearer {token}"}

        try:
            response = await self._client.request(endpoint.method, path, **request_kwargs)
        except (httpx.HTTPError, httpx.InvalidURL, OSError, UnicodeEncodeError) as exc:
            logger.warning("%s %s failed: %s", endpoint.method, path, exc)
            return Failure(TransportError(f"{endpoint.name}: {exc.__class__.__name__}: {exc}"))

        if not response.is_success:
            logger.info("%s %s returned HTTP %s", endpoint.method, path, response.status_code)
            return Failure(ProtocolError(status_code=response.status_code, message=response.reason_phrase))

        if endpoint.unit:
            return Success(None)

        return self._decode_body(endpoint, response, decode)

    @staticmethod
    def _decode_body(endpoint: Endpoint, response: httpx.Response, decode: Callable[[Any], T]) -> Outcome[T]:
        if not response.content:
            return Failure(EnvelopeError(f"{endpoint.name}: response body is empty"))

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            return Failure(EnvelopeError(f"{endpoint.name}: response body is not JSON: {exc}"))

        try:
            if endpoint.enveloped:
                return Success(Envelope.from_dict(payload, decode).data)
            return Success(decode(payload))
        except (KeyError, TypeError, ValueError, OverflowError, RecursionError) as exc:
            logger.info("%s: could not decode response: %r", endpoint.name, exc)
            return Failure(EnvelopeError(f"{endpoint.name}: unexpected response shape: {exc!r}"))
