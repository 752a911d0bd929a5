"""Tests for CSV tokenizer."""

from ninja_import.core.reader.models import Dialect
from ninja_import.core.reader.tokenizer import tokenize_line, tokenize_stream

SEMICOLON = Dialect(delimiter=";")


class TestTokenizeLine:
    """Tests for tokenize_line function."""

    def test_simple_fields(self) -> None:
        """Test tokenizing simple comma-separated fields."""
        result = tokenize_line('"a","b","c"')
        assert result == ["a", "b", "c"]

    def test_empty_fields(self) -> None:
        """Test tokenizing with empty fields."""
        result = tokenize_line('"a","","c"')
        assert result == ["a", "", "c"]

    def test_unquoted_fields(self) -> None:
        """Test tokenizing unquoted fields."""
        result = tokenize_line("a,b,c")
        assert result == ["a", "b", "c"]

    def test_mixed_quoted_unquoted(self) -> None:
        """Test tokenizing mixed quoted and unquoted fields."""
        result = tokenize_line('"John\'s Company",100.50,2024-01-01')
        assert result == ["John's Company", "100.50", "2024-01-01"]

    def test_escaped_quotes(self) -> None:
        """Test tokenizing fields with escaped quotes."""
        result = tokenize_line('"contains ""quotes"""')
        assert result == ['contains "quotes"']

    def test_delimiter_in_quotes(self) -> None:
        """Test tokenizing fields containing the delimiter."""
        result = tokenize_line('"Acme, Inc.","Berlin"')
        assert result == ["Acme, Inc.", "Berlin"]

    def test_trailing_delimiter(self) -> None:
        assert tokenize_line("a,b,") == ["a", "b", ""]

    def test_empty_line(self) -> None:
        assert tokenize_line("") == [""]

    def test_semicolon_dialect(self) -> None:
        """Test that commas are plain text under a semicolon dialect."""
        result = tokenize_line("Müller;1,50;Köln", SEMICOLON)
        assert result == ["Müller", "1,50", "Köln"]


class TestTokenizeStream:
    """Tests for tokenize_stream function."""

    def test_multiple_lines(self) -> None:
        """Test tokenizing multiple lines."""
        text = '"a","b"\n"c","d"'
        records = list(tokenize_stream(text))
        assert len(records) == 2
        assert records[0][0] == ["a", "b"]
        assert records[1][0] == ["c", "d"]

    def test_crlf_line_endings(self) -> None:
        """Test tokenizing with CRLF line endings."""
        text = "a,b\r\nc,d\r\n"
        records = list(tokenize_stream(text))
        assert [r[0] for r in records] == [["a", "b"], ["c", "d"]]

    def test_cr_line_endings(self) -> None:
        """Test tokenizing with CR-only line endings (old Mac exports)."""
        text = "a,b\rc,d"
        records = list(tokenize_stream(text))
        assert len(records) == 2

    def test_embedded_newline_in_quoted_field(self) -> None:
        """Test multi-line field with embedded newline."""
        text = '"Street 1\nBuilding B",b\nc,d'
        records = list(tokenize_stream(text))
        assert len(records) == 2
        assert records[0][0] == ["Street 1\nBuilding B", "b"]
        assert records[0][1:] == (1, 2)
        assert records[1][1:] == (3, 3)

    def test_embedded_crlf_preserved(self) -> None:
        text = '"x\r\ny",z\r\n'
        records = list(tokenize_stream(text))
        assert records[0][0] == ["x\r\ny", "z"]

    def test_line_numbers(self) -> None:
        """Test that line numbers are correctly tracked."""
        text = '"a"\n"b"\n"c"'
        records = list(tokenize_stream(text))
        assert len(records) == 3
        # Check start and end line numbers
        assert records[0][1] == 1  # start_line
        assert records[1][1] == 2
        assert records[2][1] == 3
        assert records[0][2] == 1  # end_line
        assert records[1][2] == 2

    def test_blank_lines_skipped_by_default(self) -> None:
        records = list(tokenize_stream("a,b\n\n,\nc,d\n"))
        assert [r[0] for r in records] == [["a", "b"], ["c", "d"]]

    def test_blank_lines_kept(self) -> None:
        records = list(tokenize_stream("a\n\nb\n", skip_blank=False))
        assert [r[0] for r in records] == [["a"], [""], ["b"]]

    def test_trailing_newline_adds_no_record(self) -> None:
        assert len(list(tokenize_stream("a,b\n", skip_blank=False))) == 1

    def test_unclosed_quote_runs_to_end(self) -> None:
        """Test that an unterminated quoted field swallows the rest of the text."""
        records = list(tokenize_stream('a,"open\nstill open'))
        assert records == [(["a", "open\nstill open"], 1, 2)]

    def test_text_after_closing_quote(self) -> None:
        assert tokenize_line('"abc"def,g') == ["abcdef", "g"]
