"""Whitespace normalization for playlist text."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def clean_line(line: str) -> str:
    """Collapse whitespace; for `#EXTINF` lines, tidy the split at the first comma."""

    line = _WHITESPACE_RE.sub(" ", line.strip())
    if line.startswith("#EXTINF"):
        extinf, sep, title = line.partition(",")
        if sep:
            return f"{extinf},{title.strip()}"
    return line


def clean_playlist(text: str) -> str:
    lines = [clean_line(line) for line in text.split("\n")]
    content = "\n".join(line for line in lines if line)
    return content.strip() + "\n"
