"""HTTP liveness prober for stream URLs.

Per probe:
- Up to `max_retries` attempts. An attempt sends HEAD; on 405 it falls back,
  within the same attempt, to a ranged GET whose status wins.
- Any HTTP response ends the probe (alive below 400, dead otherwise).
- Transport failures are classified into a short message and retried after
  a linear backoff (`delay * (attempt + 1)`); the last one is reported as dead
  with status 0.
"""

from __future__ import annotations

import asyncio
import errno
import logging
import socket
from dataclasses import dataclass
from typing import Awaitable, Callable, Union

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import ProbeResult
from core.interfaces.prober import StreamProber

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

# Upper bound on what the GET fallback reads when a server ignores Range.
_MAX_DRAIN_BYTES = 64 * 1024

_DNS_ERROR_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "no address associated with hostname",
)


@dataclass(frozen=True)
class Success:
    """The server answered; `result` is final whatever the status."""

    result: ProbeResult


@dataclass(frozen=True)
class Retry:
    """Transport failure with attempts left."""

    error_message: str
    delay_seconds: float


@dataclass(frozen=True)
class Fail:
    """Transport failure on the last allowed attempt."""

    result: ProbeResult


AttemptOutcome = Union[Success, Retry, Fail]


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def classify_transport_error(exc: BaseException, *, timeout_ms: int) -> str:
    """Map a transport-level exception to a short human-readable message."""

    if isinstance(exc, httpx.ConnectTimeout):
        return "Connection timeout"
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return f"Timeout after {timeout_ms}ms"

    for item in _exception_chain(exc):
        if isinstance(item, ConnectionRefusedError):
            return "Connection refused"
        if isinstance(item, socket.gaierror):
            return "Host not found"
        if isinstance(item, OSError) and item.errno == errno.ETIMEDOUT:
            return "Connection timeout"

    detail = str(exc) or exc.__class__.__name__
    lowered = detail.lower()
    if "connection refused" in lowered:
        return "Connection refused"
    if any(marker in lowered for marker in _DNS_ERROR_MARKERS):
        return "Host not found"
    return f"Connection error: {detail}"


class HttpStreamProber(StreamProber):
    """Checks stream URLs over HTTP with retries and a HEAD -> GET fallback."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client
        self._owns_client = client is None
        self._sleep = sleep

    async def __aenter__(self) -> "HttpStreamProber":
        self._get_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = build_async_client(self._settings)
        return self._client

    @property
    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._settings.user_agent}

    async def probe(self, url: str) -> ProbeResult:
        max_attempts = self._settings.max_retries
        for attempt in range(max_attempts):
            try:
                outcome = await self._attempt(url, attempt)
            except Exception as exc:  # pragma: no cover
                logger.debug("Unexpected error probing %s", url, exc_info=True)
                return ProbeResult.dead(f"Connection error: {exc}")

            if isinstance(outcome, (Success, Fail)):
                return outcome.result

            logger.debug(
                "Attempt %d/%d for %s failed (%s); retrying in %.1fs",
                attempt + 1,
                max_attempts,
                url,
                outcome.error_message,
                outcome.delay_seconds,
            )
            await self._sleep(outcome.delay_seconds)

        # max_retries >= 1, so the last attempt always returns Success or Fail.
        raise AssertionError("unreachable")  # pragma: no cover

    async def _attempt(self, url: str, attempt: int) -> AttemptOutcome:
        timeout_ms = self._settings.request_timeout_ms
        try:
            async with asyncio.timeout(self._settings.request_timeout_seconds):
                status = await self._request_status(url)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            message = classify_transport_error(exc, timeout_ms=timeout_ms)
            if attempt >= self._settings.max_retries - 1:
                return Fail(ProbeResult.dead(message, 0))
            delay = self._settings.delay_between_requests_seconds * (attempt + 1)
            return Retry(error_message=message, delay_seconds=delay)

        return Success(ProbeResult.from_status(status))

    async def _request_status(self, url: str) -> int:
        client = self._get_client()
        response = await client.head(url, headers=self._headers)
        logger.debug("HEAD %s -> %s", url, response.status_code)
        if response.status_code != 405:
            return response.status_code
        return await self._ranged_get_status(url)

    async def _ranged_get_status(self, url: str) -> int:
        client = self._get_client()
        headers = {**self._headers, "Range": f"bytes=0-{self._settings.range_bytes}"}
        async with client.stream("GET", url, headers=headers) as response:
            drained = 0
            async for chunk in response.aiter_bytes():
                drained += len(chunk)
                if drained > _MAX_DRAIN_BYTES:
                    break
            logger.debug("GET (range) %s -> %s after %d bytes", url, response.status_code, drained)
            return response.status_code
