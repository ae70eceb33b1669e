"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and redirect policy for every probe.
- Makes testing easy: pass a `transport` (e.g. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` configured for stream probes.

    Why a builder:
    - Every probe uses the same timeout and User-Agent.
    - Redirects are not followed: a 3xx already proves the server answered.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )
