"""
Unit tests for the playlist sorter and formatter.
"""
import pytest

from core.domain.errors import FormatError
from core.playlist.formatter import clean_line, clean_playlist
from core.playlist.sorter import group_title_of, sort_playlist, split_entries


class TestSortPlaylist:
    """Tests for sort_playlist."""

    def test_sorts_by_group_title(self):
        """Whole entries move together, ordered by group-title."""
        text = (
            "#EXTM3U\n"
            '#EXTINF:-1 group-title="Sports",Match\n'
            "#EXTVLCOPT:http-referrer=http://ref.example/\n"
            "http://sports.example.com/1\n"
            '#EXTINF:-1 group-title="News",Headlines\n'
            "http://news.example.com/1\n"
        )
        assert sort_playlist(text) == (
            "#EXTM3U\n"
            '#EXTINF:-1 group-title="News",Headlines\n'
            "http://news.example.com/1\n"
            '#EXTINF:-1 group-title="Sports",Match\n'
            "#EXTVLCOPT:http-referrer=http://ref.example/\n"
            "http://sports.example.com/1\n"
        )

    def test_stable_for_equal_groups(self):
        """Entries sharing a group keep their original relative order."""
        text = (
            "#EXTM3U\n"
            '#EXTINF:-1 group-title="News",N1\nhttp://n1.example.com/\n'
            '#EXTINF:-1 group-title="Movies",M1\nhttp://m1.example.com/\n'
            '#EXTINF:-1 group-title="News",N2\nhttp://n2.example.com/\n'
            '#EXTINF:-1 group-title="Movies",M2\nhttp://m2.example.com/\n'
            '#EXTINF:-1 group-title="News",N3\nhttp://n3.example.com/\n'
        )
        titles = [line.rsplit(",", 1)[1] for line in sort_playlist(text).splitlines() if line.startswith("#EXTINF")]
        assert titles == ["M1", "M2", "N1", "N2", "N3"]

    def test_missing_group_sorts_first(self):
        """Entries without group-title sort as an empty group."""
        text = (
            "#EXTM3U\n"
            '#EXTINF:-1 group-title="Kids",K\nhttp://k.example.com/\n'
            "#EXTINF:-1,NoGroup\nhttp://x.example.com/\n"
        )
        lines = sort_playlist(text).splitlines()
        assert lines[1] == "#EXTINF:-1,NoGroup"

    def test_requires_header(self):
        """A first line other than #EXTM3U is rejected."""
        with pytest.raises(FormatError):
            sort_playlist('#EXTINF:-1 group-title="A",A\nhttp://a.example.com/\n')

    def test_header_attributes_are_kept(self):
        """Header attributes survive sorting."""
        text = '#EXTM3U x-tvg-url="http://epg.example/guide.xml"\n#EXTINF:-1,A\nhttp://a.example.com/\n'
        assert sort_playlist(text).splitlines()[0] == '#EXTM3U x-tvg-url="http://epg.example/guide.xml"'


class TestSplitEntries:
    """Tests for split_entries and group_title_of."""

    def test_drops_incomplete_entries(self):
        """An #EXTINF without URL is dropped, as are stray lines."""
        lines = [
            "http://stray.example.com/",
            "#EXTVLCOPT:stray",
            "#EXTINF:-1,Orphan",
            "#EXTINF:-1,Kept",
            "http://kept.example.com/",
            "#EXTINF:-1,Trailing",
        ]
        assert split_entries(lines) == [["#EXTINF:-1,Kept", "http://kept.example.com/"]]

    def test_group_title_of(self):
        """Reads group-title, allowing empty values."""
        assert group_title_of('#EXTINF:-1 group-title="Music",X') == "Music"
        assert group_title_of('#EXTINF:-1 group-title="",X') == ""
        assert group_title_of("#EXTINF:-1,X") == ""


class TestCleanPlaylist:
    """Tests for clean_line and clean_playlist."""

    def test_collapses_whitespace(self):
        """Runs of whitespace become a single space."""
        assert clean_line("  http://a.example.com/x   ") == "http://a.example.com/x"
        assert clean_line("#EXTVLCOPT:a \t b") == "#EXTVLCOPT:a b"

    def test_extinf_splits_at_first_comma(self):
        """The title starts after the first comma; later commas are untouched."""
        assert clean_line("#EXTINF:-1 group-title=\"News\",  Channel,  The Show") == (
            '#EXTINF:-1 group-title="News",Channel, The Show'
        )

    def test_extinf_without_comma(self):
        """Lines without a comma are only whitespace-normalized."""
        assert clean_line("#EXTINF:-1    Broken") == "#EXTINF:-1 Broken"

    def test_removes_blank_lines_and_single_trailing_newline(self):
        """Blank lines go away and the file ends with one newline."""
        text = "\n#EXTM3U\n\n\n#EXTINF:-1 ,  A\r\nhttp://a.example.com/\n\n\n"
        assert clean_playlist(text) == "#EXTM3U\n#EXTINF:-1 ,A\nhttp://a.example.com/\n"
