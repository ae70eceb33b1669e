"""Domain errors.

Only failures to obtain a playlist are exceptions. Per-stream failures
(timeouts, refused connections, HTTP >= 400) are folded into `ProbeResult`
by the prober and never reach this hierarchy.
"""

from __future__ import annotations


class PlaylistError(Exception):
    """Base class for playlist-level failures."""


class SourceError(PlaylistError):
    """The playlist is missing or unreadable. Aborts the run."""


class FormatError(SourceError):
    """The playlist text is empty or structurally unusable."""
