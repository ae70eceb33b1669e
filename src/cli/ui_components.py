"""CLI UI components (Rich).

Why separate components:
- Keeps command logic free of presentation details.
- The transcript is line-oriented (CI logs), so everything here prints plain
  lines with `soft_wrap=True` and markup disabled for playlist-provided text.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.config import AppSettings
from core.domain.models import CheckedEntry, CheckRun, StreamEntry


def _line(console: Console, text: str = "", *, style: str | None = None) -> None:
    console.print(text, style=style, markup=False, emoji=False, highlight=False, soft_wrap=True)


def print_banner(console: Console) -> None:
    """Print the transcript header.

    Can be skipped in non-interactive modes (`--no-banner`).
    """

    _line(console, "🎵 M3U Live Stream Dead Link Checker", style="bold cyan")
    _line(console, "=====================================", style="cyan")


def print_parsing(console: Console, path: Path) -> None:
    _line(console, f"📂 Parsing {path}...")


def print_found(console: Console, total: int) -> None:
    _line(console, f"🔍 Found {total} streams to check")
    _line(console)


def print_no_entries(console: Console) -> None:
    _line(console, "❌ No stream URLs found in playlist", style="yellow")


def format_progress(position: int, total: int) -> str:
    return f"[{position:>3}/{total}]"


def print_checking(console: Console, position: int, total: int, entry: StreamEntry) -> None:
    _line(console, f"{format_progress(position, total)} Checking: {entry.display_title()}")


def print_dead_details(console: Console, checked: CheckedEntry) -> None:
    entry, result = checked.entry, checked.result
    _line(console)
    _line(console, "🔴 DEAD STREAM FOUND:", style="bold red")
    _line(console, f"   Title: {entry.title}")
    if entry.group_title:
        _line(console, f"   Group: {entry.group_title}")
    _line(console, f"   URL: {entry.url}")
    _line(console, f"   Error: {result.error_message}")
    _line(console, f"   Status Code: {result.status_code or 'N/A'}")


def print_result(console: Console, checked: CheckedEntry) -> None:
    result = checked.result
    if result.is_alive:
        _line(console, f"   ✅ Live ({result.status_code})", style="green")
        return
    _line(console, f"   ❌ Dead ({result.error_message})", style="red")
    print_dead_details(console, checked)


def format_success_rate(run: CheckRun) -> str | None:
    rate = run.success_rate
    if rate is None:
        return None
    return f"{rate * 100:.1f}%"


def print_summary(console: Console, run: CheckRun) -> None:
    """Final summary block plus the itemized dead-streams list."""

    _line(console)
    _line(console, "📊 CHECK COMPLETED", style="bold")
    _line(console, "===================")
    _line(console, f"✅ Live: {run.alive_count}")
    _line(console, f"❌ Dead: {run.dead_count}")
    rate = format_success_rate(run)
    if rate is not None:
        _line(console, f"📈 Success Rate: {rate}")

    dead = run.dead_entries
    if not dead:
        _line(console)
        _line(console, "🎉 All streams are live! No issues found.", style="green")
        return

    _line(console)
    _line(console, "🚨 DEAD STREAMS SUMMARY:", style="bold red")
    _line(console, "=========================")
    for checked in dead:
        entry = checked.entry
        _line(console, f"{checked.position:>2}. {entry.title}")
        if entry.group_title:
            _line(console, f"    Group: {entry.group_title}")
        _line(console, f"    URL: {entry.url}")
        _line(console, f"    Error: {checked.result.error_message}")
        _line(console)


def build_settings_table(settings: AppSettings) -> Table:
    """Table of the effective settings (used by `doctor`)."""

    table = Table(title="M3U Checker Settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Playlist", escape(str(settings.playlist_path)))
    table.add_row("Request timeout", f"{settings.request_timeout_ms} ms")
    table.add_row("Max attempts", str(settings.max_retries))
    table.add_row("Delay between requests", f"{settings.delay_between_requests_ms} ms")
    table.add_row("Range fallback", f"bytes=0-{settings.range_bytes}")
    table.add_row("User-Agent", escape(settings.user_agent))
    return table
