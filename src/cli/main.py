"""Typer application: `m3u-checker`.

Commands:
- `check`: probe every stream of a playlist and print the dead-link report.
- `sort`: reorder entries by group-title.
- `clean`: normalize whitespace and `#EXTINF` formatting.
- `doctor`: environment diagnostics.

Exit status is 1 only when the playlist cannot be obtained; dead streams are
reported but do not fail the command.
"""

from __future__ import annotations

import asyncio
import locale
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.json_exporter import export_check_run_json
from adapters.playlist_source import read_playlist, write_playlist
from adapters.stream_prober import HttpStreamProber
from cli import ui_components as ui
from cli.doctor import app as doctor_app
from core.config import AppSettings
from core.domain.errors import SourceError
from core.domain.models import CheckRun
from core.playlist import clean_playlist, parse_playlist, sort_playlist
from core.services.check_pipeline import CheckHooks, run_check

app = typer.Typer(
    no_args_is_help=True,
    help="Check M3U playlists for dead live-stream links.",
)
app.add_typer(doctor_app, name="doctor")

_console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _apply_overrides(
    settings: AppSettings,
    *,
    timeout_ms: int | None,
    retries: int | None,
    delay_ms: int | None,
) -> AppSettings:
    overrides: dict[str, int] = {}
    if timeout_ms is not None:
        overrides["request_timeout_ms"] = timeout_ms
    if retries is not None:
        overrides["max_retries"] = retries
    if delay_ms is not None:
        overrides["delay_between_requests_ms"] = delay_ms
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


async def _check_playlist(
    *,
    path: Path,
    settings: AppSettings,
    console: Console,
    show_banner: bool,
) -> CheckRun:
    if show_banner:
        ui.print_banner(console)

    ui.print_parsing(console, path)
    entries = parse_playlist(read_playlist(path))
    ui.print_found(console, len(entries))

    if not entries:
        ui.print_no_entries(console)
        return CheckRun()

    hooks = CheckHooks(
        checking=lambda position, total, entry: ui.print_checking(console, position, total, entry),
        result=lambda checked, _total: ui.print_result(console, checked),
    )
    async with HttpStreamProber(settings) as prober:
        run = await run_check(entries=entries, prober=prober, settings=settings, hooks=hooks)

    ui.print_summary(console, run)
    return run


@app.command()
def check(
    playlist: Path | None = typer.Argument(
        None,
        help="Playlist to check (defaults to M3U_CHECKER_PLAYLIST_PATH or free.m3u).",
    ),
    json_path: Path | None = typer.Option(
        None,
        "--json",
        help="Also write a machine-readable JSON report to this path.",
    ),
    timeout_ms: int | None = typer.Option(None, "--timeout-ms", min=1, help="Per-attempt timeout (ms)."),
    retries: int | None = typer.Option(None, "--retries", min=1, max=10, help="Attempts per stream."),
    delay_ms: int | None = typer.Option(None, "--delay-ms", min=0, help="Pause between streams (ms)."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the header banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Probe every stream in PLAYLIST and report the dead ones."""

    _configure_logging(verbose)
    settings = _apply_overrides(
        AppSettings(),
        timeout_ms=timeout_ms,
        retries=retries,
        delay_ms=delay_ms,
    )
    path = playlist or settings.playlist_path

    try:
        run = asyncio.run(
            _check_playlist(path=path, settings=settings, console=_console, show_banner=not no_banner)
        )
    except SourceError as exc:
        _console.print(f"❌ Error during check: {exc}", style="red", markup=False, emoji=False, soft_wrap=True)
        raise typer.Exit(code=1)

    if json_path is not None:
        out = export_check_run_json(run=run, output_path=json_path)
        _console.print(f"[green]JSON report written to:[/green] {escape(str(out))}")


@app.command()
def sort(
    playlist: Path = typer.Argument(..., help="Playlist to sort."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of in place."),
) -> None:
    """Sort PLAYLIST entries by group-title (stable)."""

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        # Unknown locale in the environment: keep the C collation.
        pass

    try:
        text = sort_playlist(read_playlist(playlist))
    except SourceError as exc:
        _console.print(f"Error: {exc}", style="red", markup=False, emoji=False, soft_wrap=True)
        raise typer.Exit(code=1)

    out = write_playlist(output or playlist, text)
    _console.print(f"[green]Playlist sorted by group-title:[/green] {escape(str(out))}")


@app.command()
def clean(
    playlist: Path = typer.Argument(..., help="Playlist to clean."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of in place."),
) -> None:
    """Collapse whitespace and normalize #EXTINF lines in PLAYLIST."""

    try:
        text = clean_playlist(read_playlist(playlist))
    except SourceError as exc:
        _console.print(f"Error cleaning {playlist}: {exc}", style="red", markup=False, emoji=False, soft_wrap=True)
        raise typer.Exit(code=1)

    out = write_playlist(output or playlist, text)
    _console.print(f"[green]Basic cleanup completed:[/green] {escape(str(out))}")


def run() -> None:
    app()
