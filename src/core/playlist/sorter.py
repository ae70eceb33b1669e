"""Reorders playlist entries by their `group-title` attribute.

An entry is an `#EXTINF` line, any directive lines that follow it
(`#EXTVLCOPT`, ...) and the URL line that closes it. Entries without a URL
and lines outside any entry are dropped.
"""

from __future__ import annotations

import locale
import re

from core.domain.errors import FormatError

HEADER = "#EXTM3U"

_GROUP_TITLE_RE = re.compile(r'group-title="([^"]*)"')


def group_title_of(extinf_line: str) -> str:
    match = _GROUP_TITLE_RE.search(extinf_line)
    return match.group(1) if match else ""


def split_entries(lines: list[str]) -> list[list[str]]:
    """Group body lines (header excluded) into complete entries."""

    entries: list[list[str]] = []
    current: list[str] = []

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith("#EXTINF"):
            # An unfinished entry (no URL yet) is discarded.
            current = [line]
        elif line.startswith("#"):
            if current:
                current.append(line)
        elif current:
            current.append(line)
            entries.append(current)
            current = []

    return entries


def sort_playlist(text: str) -> str:
    """Return `text` with whole entries sorted by group title.

    Uses the current LC_COLLATE locale; `sorted` keeps entries sharing a
    group in their original order.

    Raises:
        FormatError: when the first line is not the `#EXTM3U` header.
    """

    lines = text.split("\n")
    header = lines[0].strip()
    if not header.startswith(HEADER):
        raise FormatError(f"Invalid M3U file: missing {HEADER} header")

    entries = split_entries(lines[1:])
    entries = sorted(entries, key=lambda entry: locale.strxfrm(group_title_of(entry[0])))

    out = [header]
    for entry in entries:
        out.extend(entry)
    return "\n".join(out) + "\n"
