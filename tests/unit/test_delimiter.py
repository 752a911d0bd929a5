"""Tests for delimiter detection."""

import pytest

from ninja_import.core.reader import DELIMITERS, detect_delimiter
from ninja_import.core.reader.delimiter import count_delimiters, header_line


class TestDetectDelimiter:
    """Tests for detect_delimiter function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Name,Email,City\nAcme,a@acme.test,Berlin", ","),
            ("Name;E-Mail;Ort\nMüller;m@example.de;Köln", ";"),
            ("Name|Email|City\nAcme|a@acme.test|Berlin", "|"),
            ("Name.Email\nAcme.a@acme.test", "."),
        ],
    )
    def test_single_delimiter(self, text: str, expected: str) -> None:
        assert detect_delimiter(text) == expected

    def test_most_frequent_wins(self) -> None:
        assert detect_delimiter("a,b,c;d") == ","

    def test_tie_goes_to_later_candidate(self) -> None:
        """Test that on equal counts the candidate checked last wins."""
        assert detect_delimiter("a,b;c") == ";"
        assert detect_delimiter("a,b.c;d|e") == "|"

    def test_only_header_line_counted(self) -> None:
        """Test that semicolons in data rows do not outvote the header."""
        text = "Name,Notes\nAcme;Globex;Initech,one;two;three;four\n"
        assert detect_delimiter(text) == ","

    def test_no_candidate_defaults_to_comma(self) -> None:
        assert detect_delimiter("Name") == ","

    def test_empty_text(self) -> None:
        assert detect_delimiter("") == ","

    def test_result_is_candidate(self) -> None:
        for text in ("", "x", "a.b", "1.5,2.5", "a|b;c"):
            assert detect_delimiter(text) in DELIMITERS

    def test_decimal_points_can_outvote_commas(self) -> None:
        """Test that periods are counted like any other candidate."""
        assert detect_delimiter("1.5,2.5\n") == "."


class TestHelpers:
    """Tests for header_line and count_delimiters."""

    def test_header_line(self) -> None:
        assert header_line("a,b\nc,d") == "a,b"
        assert header_line("a,b") == "a,b"

    def test_header_line_keeps_carriage_return(self) -> None:
        """Test that only LF ends the header line."""
        assert header_line("a,b\r\nc") == "a,b\r"

    def test_count_delimiters(self) -> None:
        assert count_delimiters("a;b;c|d\ne,f") == {",": 0, ".": 0, ";": 2, "|": 1}
