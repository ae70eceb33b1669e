"""Playlist check orchestration.

The checker walks entries strictly one at a time, in playlist order, with a
fixed pause between probes so target hosts (and CI egress) are never hit in
bursts. Side-effects such as printing live in the UI layer and are reached
through `CheckHooks`, which keeps this flow reusable from tests and other
entry-points.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Sequence

from core.config import AppSettings
from core.domain.models import CheckedEntry, CheckRun, StreamEntry
from core.interfaces.prober import StreamProber

logger = logging.getLogger(__name__)


@dataclass
class CheckHooks:
    """Optional callbacks for UI layers (progress and per-entry results)."""

    start: Callable[[int], None] | None = None
    checking: Callable[[int, int, StreamEntry], None] | None = None
    result: Callable[[CheckedEntry, int], None] | None = None


async def run_check(
    *,
    entries: Sequence[StreamEntry],
    prober: StreamProber,
    settings: AppSettings,
    hooks: CheckHooks | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> CheckRun:
    """Probe every entry sequentially and aggregate the results.

    An empty `entries` sequence yields an empty run without any probe.
    """

    hooks = hooks or CheckHooks()
    run = CheckRun()
    total = len(entries)

    if hooks.start:
        hooks.start(total)

    for index, entry in enumerate(entries):
        position = index + 1
        if hooks.checking:
            hooks.checking(position, total, entry)

        result = await prober.probe(entry.url)
        checked = CheckedEntry(position=position, entry=entry, result=result)
        run.entries.append(checked)
        logger.debug("[%d/%d] %s -> alive=%s", position, total, entry.url, result.is_alive)

        if hooks.result:
            hooks.result(checked, total)

        if position < total:
            await sleep(settings.delay_between_requests_seconds)

    run.finished_at = datetime.now(timezone.utc)
    return run
