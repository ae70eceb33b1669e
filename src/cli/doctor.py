"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.stream_prober import HttpStreamProber
from cli.ui_components import build_settings_table
from core.config import AppSettings, get_user_env_file
from core.domain.models import ProbeResult

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> ProbeResult:
    async with HttpStreamProber(settings) as prober:
        return await prober.probe(url)


@app.command()
def run(
    url: str = typer.Option("https://github.com", "--url", help="URL used for the connectivity check."),
) -> None:
    """Show the effective settings and run a connectivity probe."""

    settings = AppSettings()
    _console.print(build_settings_table(settings))

    table = Table(title="M3U Checker Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", escape(str(env_file)))

    playlist = settings.playlist_path
    table.add_row("Default playlist", "OK" if playlist.is_file() else "MISSING", escape(str(playlist)))

    # Connectivity (best-effort)
    result = asyncio.run(_check_http(url, settings))
    detail = f"HTTP {result.status_code}" if result.is_alive else result.error_message
    table.add_row("HTTP connectivity", "OK" if result.is_alive else "FAIL", escape(detail))

    _console.print(table)

    if not result.is_alive:
        _console.print(
            "\n[yellow]Note:[/yellow] Probes will report every stream as dead until connectivity is fixed."
        )
