"""
Shared HTTP client helpers for HTTP-based adapters.

Provides consistent timeouts and request-id propagation. There are no
retries: every upstream failure is terminal for its request.
"""

from __future__ import annotations

import httpx

from backend.core import get_request_id

ERROR_BODY_LIMIT = 2000


def create_http_client(
    base_url: str,
    timeout_seconds: float,
    headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient with consistent timeout settings.

    Args:
        base_url: Base URL for the provider.
        timeout_seconds: Connect/read/write timeout for requests.
        headers: Default headers to include.
        transport: Optional transport (used by tests with MockTransport).
    """
    timeout = httpx.Timeout(timeout_seconds)
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        headers=headers or {},
        transport=transport,
    )


def with_request_id(headers: dict[str, str]) -> dict[str, str]:
    """Forward the current request id upstream when one is set."""
    request_id = get_request_id()
    if request_id and "X-Request-ID" not in headers:
        headers["X-Request-ID"] = request_id
    return headers


async def read_error_body(response: httpx.Response) -> str:
    """Read a (possibly streamed) error body, truncated for reporting."""
    raw = await response.aread()
    body = raw.decode("utf-8", errors="replace")
    if len(body) > ERROR_BODY_LIMIT:
        body = f"{body[:ERROR_BODY_LIMIT]}...(truncated)"
    return body
