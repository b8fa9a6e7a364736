import asyncio
from typing import Any

import httpx

from .config import Settings, get_settings
from .errors import (
    UpstreamAuthError,
    UpstreamGenericError,
    UpstreamNotFound,
    UpstreamPayloadError,
    UpstreamTimeout,
)

_client: httpx.AsyncClient | None = None
_client_lock = asyncio.Lock()


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    limits = httpx.Limits(
        max_connections=settings.http_max_connections,
        max_keepalive_connections=settings.http_max_keepalive,
    )
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        limits=limits,
        headers={"User-Agent": settings.http_user_agent},
    )


async def get_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    global _client

    if _client is None:
        async with _client_lock:
            if _client is None:
                _client = build_http_client(settings or get_settings())
    return _client


async def shutdown_http_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    service: str,
    params: dict[str, Any],
    timeout: float,
    headers: dict[str, str] | None = None,
    not_found: str | None = None,
) -> Any:
    """GET ``url`` and decode its JSON body, classifying every failure.

    ``not_found`` is the client-facing message for an upstream 404; when it is
    omitted a 404 is treated like any other upstream error status.
    """
    try:
        response = await client.get(
            url, params=params, headers=headers, timeout=timeout
        )
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        raise UpstreamTimeout(service, detail=str(exc)) from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        if status == 401:
            raise UpstreamAuthError(service, detail=exc.response.text) from exc
        if status == 404 and not_found is not None:
            raise UpstreamNotFound(service, not_found) from exc
        raise UpstreamGenericError(
            service, status_code=status, detail=exc.response.text
        ) from exc
    except httpx.RequestError as exc:
        raise UpstreamGenericError(service, detail=str(exc)) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamPayloadError(service, detail="response body is not JSON") from exc
