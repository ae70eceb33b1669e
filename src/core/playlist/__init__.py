"""Playlist text handling: parsing for the checker, sorting and cleanup.

The checker parser splits `#EXTINF` lines at the first comma outside quotes;
the formatter splits at the first comma regardless of quotes. Keep them
separate.
"""

from core.playlist.formatter import clean_playlist
from core.playlist.parser import is_valid_url, parse_extinf, parse_playlist
from core.playlist.sorter import sort_playlist

__all__ = [
    "clean_playlist",
    "is_valid_url",
    "parse_extinf",
    "parse_playlist",
    "sort_playlist",
]
