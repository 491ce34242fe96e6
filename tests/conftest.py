"""Shared test fixtures for syriplot tests."""

import pytest

from syriplot.registry import load_registry
from syriplot.svtable import load_sv_table


LENGTHS_TEXT = 'chr1\t"150,000"\nchr2\t200,000\nChr3 90000\n'


def _make_row(
    chr_a="Chr1", start_a=1000, end_a=5000,
    chr_b="Chr1", start_b=6000, end_b=9000,
    sv_type="INV", uid="SV1",
):
    """One 13-column SV caller line (no trailing newline)."""
    fields = [
        chr_a, start_a, end_a, "-", "-", "-",
        chr_b, start_b, end_b, uid, "-", "-", sv_type,
    ]
    return "\t".join(str(f) for f in fields)


# Seven rows: three survive with the default (padded) bounds.
SV_ROWS = [
    _make_row(uid="INV1"),                                                   # kept
    _make_row(sv_type="DEL", uid="DEL1"),                                    # unsupported type
    _make_row(chr_b="chrX", sv_type="TRANS", uid="TRANS1"),                  # unknown chromosome
    _make_row("chr2", 10, 20, "chr3", 95000, 98000, "INVTR", "INVTR1"),      # kept (padded only)
    _make_row("-", "-", "-", "-", "-", "-", "NOTAL", "NOTAL1"),              # unsupported type
    _make_row("chr2", 0, 20, "chr2", 30, 40, "INVDP", "INVDP1"),             # out of bounds
    _make_row("CHR2", "1,500", "2,500", "chr1", 8000, 3000, "TRANS", "T2"),  # kept, B swapped
]


@pytest.fixture
def make_row():
    """Factory for SV caller lines."""
    return _make_row


@pytest.fixture
def lengths_file(tmp_path):
    p = tmp_path / "lengths.txt"
    p.write_text(LENGTHS_TEXT)
    return p


@pytest.fixture
def syri_file(tmp_path):
    p = tmp_path / "syri.out"
    p.write_text("\n".join(SV_ROWS) + "\n")
    return p


@pytest.fixture
def write_syri(tmp_path):
    """Write the given rows to a fresh SV file and return its path."""
    def _write(rows, name="custom.syri.out"):
        p = tmp_path / name
        p.write_text("\n".join(rows) + "\n")
        return p
    return _write


@pytest.fixture
def registry(lengths_file):
    return load_registry(lengths_file)


@pytest.fixture
def table(syri_file, registry):
    return load_sv_table(syri_file, registry)
