"""Playlist file access.

Why in adapters:
- The core parses text; reading and writing files is infrastructure.
- Missing/unreadable files are translated into `SourceError` here, once.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.errors import SourceError


def read_playlist(path: Path) -> str:
    """Read a UTF-8 playlist, raising `SourceError` when it cannot be read."""

    if not path.is_file():
        raise SourceError(f"{path} not found!")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Could not read {path}: {exc}") from exc


def write_playlist(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
