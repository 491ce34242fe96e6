"""Text I/O: numeric normalization, delimited line reading, table export."""

from __future__ import annotations

import gzip
import math
from pathlib import Path
from typing import TYPE_CHECKING, Generator, List, Tuple, Union

from syriplot.errors import MalformedInputError

if TYPE_CHECKING:
    from syriplot.svtable import ValidatedSVTable

Number = Union[int, float]

# Characters removed from numeric fields before conversion ("150,000,000").
_NUMBER_JUNK = str.maketrans("", "", '",')

SV_TABLE_COLUMNS = ["chrA", "startA", "endA", "chrB", "startB", "endB", "type"]


def parse_number(text: str) -> Number:
    """Convert a length/coordinate field to a number.

    Quote characters and comma thousands-separators are stripped first;
    underscore digit groups are not accepted.
    Integral values come back as ``int``; everything else as ``float``.
    Raises :class:`MalformedInputError` for empty, non-numeric, non-finite
    or negative text.
    """
    cleaned = str(text).translate(_NUMBER_JUNK).strip()
    if not cleaned or "_" in cleaned:
        raise MalformedInputError(f"expected a number, got {text!r}")
    try:
        value = float(cleaned)
    except ValueError:
        raise MalformedInputError(f"expected a number, got {text!r}") from None
    if not math.isfinite(value):
        raise MalformedInputError(f"expected a finite number, got {text!r}")
    if value < 0:
        raise MalformedInputError(f"expected a non-negative number, got {text!r}")
    if value.is_integer():
        return int(value)
    return value


def normalize_chromosome_name(name: str) -> str:
    """Uppercase a chromosome name so it can serve as a join key."""
    return name.strip().upper()


def read_delimited(
    filepath: Union[str, Path], sep: Union[str, None] = "\t",
) -> Generator[Tuple[int, List[str]], None, None]:
    """Yield ``(line_number, fields)`` for every data line of a text table.

    *sep* of ``None`` splits on any run of whitespace. Blank lines and lines
    starting with ``#`` are skipped; line numbers are 1-based and count
    skipped lines too. No quote processing is done. Supports gzip when
    *filepath* ends with ``.gz``.
    """
    filepath = Path(filepath)
    opener = gzip.open if filepath.suffix == ".gz" else open
    mode = "rt"

    with opener(filepath, mode) as fh:  # type: ignore[arg-type]
        for line_number, line in enumerate(fh, start=1):
            line = line.rstrip("\n").rstrip("\r")
            if not line.strip() or line.startswith("#"):
                continue
            yield line_number, line.split(sep)


def write_sv_table(filepath: Union[str, Path], table: "ValidatedSVTable") -> None:
    """Write a validated SV table as TSV with a header line.

    Supports gzip when *filepath* ends with ``.gz``.
    """
    filepath = Path(filepath)
    opener = gzip.open if filepath.suffix == ".gz" else open
    mode = "wt"

    with opener(filepath, mode) as fh:  # type: ignore[arg-type]
        fh.write("\t".join(SV_TABLE_COLUMNS) + "\n")
        for row in table.to_rows():
            fh.write("\t".join(str(value) for value in row) + "\n")
