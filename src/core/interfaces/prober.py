"""Stream prober contract.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The checker depends on this abstraction, so tests can feed it scripted
  verdicts and the HTTP adapter stays swappable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ProbeResult


@runtime_checkable
class StreamProber(Protocol):
    """Minimal contract for a liveness probe.

    Design rules:
    - `probe` is async because it performs network I/O.
    - It never raises: every failure is folded into the returned `ProbeResult`.
    """

    async def probe(self, url: str) -> ProbeResult:
        """Check `url` and return its liveness verdict."""

        ...
