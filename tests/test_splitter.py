"""
Tests for line splitting.
"""

import pytest

from diffy.core.diff.splitter import split_lines


class TestSplitLines:
    """Tests for split_lines."""

    @pytest.mark.parametrize("text, expected", [
        ("", []),
        (None, []),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\nb", ["a", "b"]),
        ("a\r\nb\r\n", ["a", "b"]),
        ("\n", [""]),
        ("a\n\n", ["a", ""]),
        ("\n\na", ["", "", "a"]),
        ("a\rb", ["a\rb"]),
        ("a\r", ["a\r"]),
        ("a\nb\r", ["a", "b\r"]),
        ("mixed\r\nendings\n", ["mixed", "endings"]),
    ])
    def test_split(self, text, expected):
        assert split_lines(text) == expected

    def test_only_one_trailing_terminator_is_dropped(self):
        assert split_lines("x\n\n\n") == ["x", "", ""]

    def test_carriage_return_only_stripped_before_newline(self):
        assert split_lines("a\r\r\n") == ["a\r"]

    def test_trailing_carriage_return_is_content(self):
        assert split_lines("a\r") == ["a\r"]
        assert split_lines("a\r\n") == ["a"]
