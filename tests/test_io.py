"""Tests for I/O module."""

import gzip
import pytest

from syriplot.errors import MalformedInputError
from syriplot.io import (
    normalize_chromosome_name,
    parse_number,
    read_delimited,
    write_sv_table,
)


class TestParseNumber:
    def test_plain_integer(self):
        assert parse_number("900000") == 900000
        assert isinstance(parse_number("900000"), int)

    def test_commas_and_quotes_stripped(self):
        assert parse_number('"150,000,000"') == 150000000
        assert parse_number("1,234") == 1234

    def test_decimal_and_exponent(self):
        assert parse_number("12.5") == 12.5
        assert parse_number("1e5") == 100000

    def test_surrounding_whitespace(self):
        assert parse_number("  42 ") == 42

    @pytest.mark.parametrize("text", ["abc", "", '""', "-", "12abc", "nan", "inf"])
    def test_malformed(self, text):
        with pytest.raises(MalformedInputError):
            parse_number(text)

    def test_underscore_groups_rejected(self):
        with pytest.raises(MalformedInputError):
            parse_number("150_000_000")

    def test_negative_rejected(self):
        with pytest.raises(MalformedInputError, match="non-negative"):
            parse_number("-5")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_number("abc")


class TestNormalizeChromosomeName:
    def test_uppercases(self):
        assert normalize_chromosome_name("chr1") == "CHR1"

    def test_idempotent(self):
        for name in ["chr1", "Chr_X", "scaffold_12a", "CHR2"]:
            once = normalize_chromosome_name(name)
            assert normalize_chromosome_name(once) == once


class TestReadDelimited:
    def test_skips_blank_and_comment_lines(self, tmp_path):
        p = tmp_path / "t.tsv"
        p.write_text("# header\na\tb\n\nc\td\n")
        rows = list(read_delimited(p))
        assert rows == [(2, ["a", "b"]), (4, ["c", "d"])]

    def test_whitespace_split(self, tmp_path):
        p = tmp_path / "t.txt"
        p.write_text("chr1   100\nchr2\t200\n")
        rows = [fields for _, fields in read_delimited(p, sep=None)]
        assert rows == [["chr1", "100"], ["chr2", "200"]]

    def test_quotes_not_processed(self, tmp_path):
        p = tmp_path / "t.tsv"
        p.write_text('"a b"\tc\n')
        assert list(read_delimited(p)) == [(1, ['"a b"', "c"])]

    def test_windows_line_endings(self, tmp_path):
        p = tmp_path / "t.tsv"
        p.write_bytes(b"a\tb\r\n")
        assert list(read_delimited(p)) == [(1, ["a", "b"])]

    def test_gzipped(self, tmp_path):
        p = tmp_path / "t.tsv.gz"
        with gzip.open(p, "wt") as f:
            f.write("a\tb\n")
        assert list(read_delimited(p)) == [(1, ["a", "b"])]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list(read_delimited(tmp_path / "nope.txt"))


class TestWriteSvTable:
    def test_header_and_rows(self, tmp_path, table):
        p = tmp_path / "valid.tsv"
        write_sv_table(p, table)
        lines = p.read_text().splitlines()
        assert lines[0] == "chrA\tstartA\tendA\tchrB\tstartB\tendB\ttype"
        assert len(lines) == len(table) + 1
        assert lines[1] == "CHR1\t1000\t5000\tCHR1\t6000\t9000\tINV"

    def test_gzipped(self, tmp_path, table):
        p = tmp_path / "valid.tsv.gz"
        write_sv_table(p, table)
        with gzip.open(p, "rt") as f:
            assert f.readline().startswith("chrA")
