"""M3U playlist parser used by the liveness checker.

Rules:
- An `#EXTINF:` line fills a single pending-metadata slot; a later one
  overwrites it, so metadata never followed by a URL is dropped.
- The separator between the attribute block and the title is the first comma
  outside a quoted attribute value: attribute values and titles may both
  contain commas. With unbalanced quotes the last comma is used.
  The formatter (`core.playlist.formatter`) splits at the first comma
  regardless of quotes; do not share code between them.
- Any other `#` line is a comment. Non-URL lines are ignored.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from core.domain.errors import FormatError
from core.domain.models import StreamEntry

EXTINF_PREFIX = "#EXTINF:"
COMMENT_PREFIX = "#"
UNKNOWN_TITLE = "Unknown"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_GROUP_TITLE_RE = re.compile(r'group-title="([^"]+)"')


def is_valid_url(value: str) -> bool:
    """Return True for a well-formed absolute URI (scheme + network location)."""

    try:
        parts = urlsplit(value)
        # Accessing .port validates it (raises ValueError when out of range).
        parts.port
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    if not parts.netloc or not parts.hostname:
        return False
    return not any(ch.isspace() for ch in parts.netloc)


def _title_separator(content: str) -> int:
    """Index of the comma ending the attribute block, or -1 if there is none."""

    in_quotes = False
    for index, ch in enumerate(content):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            return index
    return content.rfind(",")


def parse_extinf(line: str) -> tuple[str, str]:
    """Split an `#EXTINF:` line into `(title, group_title)`."""

    content = line[len(EXTINF_PREFIX):] if line.startswith(EXTINF_PREFIX) else line
    separator = _title_separator(content)
    if separator == -1:
        # Malformed: no attribute/title separator at all.
        return content.strip() or UNKNOWN_TITLE, ""

    attributes, title = content[:separator], content[separator + 1:]
    match = _GROUP_TITLE_RE.search(attributes)
    group_title = match.group(1) if match else ""
    return title.strip() or UNKNOWN_TITLE, group_title


def parse_playlist(text: str) -> list[StreamEntry]:
    """Parse playlist text into entries, preserving playlist order.

    Raises:
        FormatError: when `text` has no non-blank line at all.
    """

    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise FormatError("Playlist is empty")

    entries: list[StreamEntry] = []
    pending: tuple[str, str] | None = None

    for line in lines:
        if line.startswith(EXTINF_PREFIX):
            pending = parse_extinf(line)
            continue
        if line.startswith(COMMENT_PREFIX):
            continue
        if not is_valid_url(line):
            continue

        title, group_title = pending if pending is not None else (UNKNOWN_TITLE, "")
        entries.append(StreamEntry(url=line, title=title, group_title=group_title))
        pending = None

    return entries
