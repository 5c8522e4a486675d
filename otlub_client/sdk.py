from __future__ import annotations

import logging
import threading

import httpx

from otlub_client.auth import TokenStore
from otlub_client.config import SdkConfig
from otlub_client.http import RequestExecutor, build_async_client
from otlub_client.logging_utils import configure_logging
from otlub_client.services import OtlubService

logger = logging.getLogger(__name__)


class UninitializedError(RuntimeError):
    pass


_instance: OtlubService | None = None
_lock = threading.Lock()


def build_service(
    config: SdkConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    token_store: TokenStore | None = None,
) -> OtlubService:
    config.validate()
    if config.debug:
        configure_logging(debug=True)
    store = token_store or TokenStore.at_path(config.token_cache_path)
    executor = RequestExecutor(build_async_client(config, transport=transport))
    return OtlubService(config=config, token_store=store, executor=executor)


def initialize(config: SdkConfig | None = None) -> OtlubService:
    global _instance

    instance = _instance
    if instance is not None:
        return instance

    with _lock:
        if _instance is None:
            _instance = build_service(config or SdkConfig.from_env())
            logger.info("SDK initialized for %s", _instance.config.base_url)
        return _instance


def get_instance() -> OtlubService:
    instance = _instance
    if instance is None:
        raise UninitializedError("SDK not initialized. Call initialize() first.")
    return instance


def is_initialized() -> bool:
    return _instance is not None


def destroy() -> None:
    global _instance

    with _lock:
        instance, _instance = _instance, None
    if instance is not None:
        instance.destroy()
        logger.info("SDK destroyed")


async def shutdown() -> None:
    global _instance

    with _lock:
        instance, _instance = _instance, None
    if instance is not None:
        await instance.aclose()
        logger.info("SDK shut down")
