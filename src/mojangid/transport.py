import json
from typing import Any

import httpx
import structlog

from mojangid.config import Settings, settings
from mojangid.errors import BadStatusError, ParseError, TransportError

log = structlog.get_logger()

# Body text kept on a BadStatusError when upstream sends no JSON error
_MAX_ERROR_TEXT = 200


def build_client(
    config: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    config = config or settings
    return httpx.Client(
        timeout=httpx.Timeout(config.request_timeout_seconds),
        headers={"User-Agent": config.user_agent},
        transport=transport,
    )


def build_async_client(
    config: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    config = config or settings
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.request_timeout_seconds),
        headers={"User-Agent": config.user_agent},
        transport=transport,
    )


def _encode_payload(payload: Any) -> tuple[bytes | None, dict[str, str]]:
    if payload is None:
        return None, {}
    return json.dumps(payload).encode("utf-8"), {"Content-Type": "application/json"}


def _error_message(response: httpx.Response) -> str:
    """Best-effort server message: Mojang's errorMessage/error, else the reason phrase and body text."""
    parts = [response.reason_phrase] if response.reason_phrase else []
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            parts.append(text[:_MAX_ERROR_TEXT])
    else:
        if isinstance(body, dict):
            detail = body.get("errorMessage") or body.get("error")
            if detail:
                parts.append(str(detail))
    return ". ".join(parts)


def _interpret(response: httpx.Response, method: str, url: str) -> Any:
    """Map a fully-read response to the absent result, a JSON value or an error."""
    status = response.status_code
    if status == 204:
        log.debug("mojang_absent", method=method, url=url)
        return None

    if status != 200:
        message = _error_message(response)
        log.warning("mojang_bad_status", method=method, url=url, status=status, message=message)
        raise BadStatusError(url, status, message)

    try:
        return json.loads(response.content)
    except ValueError as e:
        log.error("mojang_parse_error", method=method, url=url, error=str(e))
        raise ParseError(url, str(e)) from e


def request_json(
    client: httpx.Client, method: str, url: str, payload: Any = None
) -> Any:
    """Perform a request and decode the JSON body.

    Returns None on HTTP 204. Raises BadStatusError on any status other
    than 200/204, TransportError on network failure, ParseError on a
    malformed body. The response stream is closed on every path.
    """
    content, headers = _encode_payload(payload)
    log.debug("mojang_request", method=method, url=url)
    try:
        with client.stream(method, url, content=content, headers=headers) as response:
            response.read()
    except httpx.HTTPError as e:
        log.error("mojang_transport_error", method=method, url=url, error=repr(e))
        raise TransportError(url) from e
    return _interpret(response, method, url)


async def arequest_json(
    client: httpx.AsyncClient, method: str, url: str, payload: Any = None
) -> Any:
    """Async twin of request_json."""
    content, headers = _encode_payload(payload)
    log.debug("mojang_request", method=method, url=url)
    try:
        async with client.stream(method, url, content=content, headers=headers) as response:
            await response.aread()
    except httpx.HTTPError as e:
        log.error("mojang_transport_error", method=method, url=url, error=repr(e))
        raise TransportError(url) from e
    return _interpret(response, method, url)


def get_json(client: httpx.Client, url: str) -> Any:
    return request_json(client, "GET", url)


def post_json(client: httpx.Client, url: str, payload: Any) -> Any:
    return request_json(client, "POST", url, payload)


async def aget_json(client: httpx.AsyncClient, url: str) -> Any:
    return await arequest_json(client, "GET", url)


async def apost_json(client: httpx.AsyncClient, url: str, payload: Any) -> Any:
    return await arequest_json(client, "POST", url, payload)
