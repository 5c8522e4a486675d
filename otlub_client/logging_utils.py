from __future__ import annotations

import logging

import httpx

LOGGER_NAME = "otlub_client"
_BODY_LIMIT = 2000
_REDACTED_HEADERS = ("authorization", "x-api-key")


def configure_logging(debug: bool = False) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not any(getattr(handler, "_otlub_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._otlub_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger


def _safe_headers(headers: httpx.Headers) -> dict[str, str]:
    return {
        key: ("<redacted>" if key.lower() in _REDACTED_HEADERS else value)
        for key, value in headers.items()
    }


def _clip(content: bytes) -> str:
    text = content.decode("utf-8", errors="replace")
    if len(text) > _BODY_LIMIT:
        return text[:_BODY_LIMIT] + "...(truncated)"
    return text


def build_debug_hooks(logger: logging.Logger) -> dict[str, list]:
    async def log_request(request: httpx.Request) -> None:
        logger.debug(
            "--> %s %s headers=%s body=%s",
            request.method,
            request.url,
            _safe_headers(request.headers),
            _clip(request.content) if request.content else "",
        )

    async def log_response(response: httpx.Response) -> None:
        await response.aread()
        logger.debug(
            "<-- %s %s %s body=%s",
            response.status_code,
            response.request.method,
            response.request.url,
            _clip(response.content) if response.content else "",
        )

    return {"request": [log_request], "response": [log_response]}
