"""SV record loading and validation against a chromosome registry.

Rows of a SyRI-style output table are mapped one at a time to
:class:`SVRecord` values and filtered in input order:

1. the event type must be one of :class:`SVType`,
2. all four coordinates must parse as numbers,
3. both chromosomes must be registry members,
4. after ordering each coordinate pair, both spans must lie within
   ``[1, length]`` of their chromosome.

Rows failing 1, 3 or 4 are expected noise and only counted. Rows failing 2
(or too short to hold 13 columns) are malformed: they abort the load unless
``on_malformed="skip"``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from syriplot.errors import MalformedInputError
from syriplot.io import Number, normalize_chromosome_name, parse_number, read_delimited
from syriplot.registry import ChromosomeRegistry

MIN_COLUMNS = 13

# 0-based column positions in the SV caller output.
COL_CHR_A, COL_START_A, COL_END_A = 0, 1, 2
COL_CHR_B, COL_START_B, COL_END_B = 6, 7, 8
COL_TYPE = 12

BOUNDS_MODES = ("padded", "raw")
MALFORMED_POLICIES = ("abort", "skip")


class SVType(Enum):
    """Structural-variant kinds that are plotted."""

    INV = "INV"
    TRANS = "TRANS"
    INVTR = "INVTR"
    DUP = "DUP"
    INVDP = "INVDP"

    @property
    def label(self) -> str:
        return SV_TYPE_LABELS[self]

    @classmethod
    def parse(cls, text: str) -> Optional["SVType"]:
        """Return the member named *text*, or ``None`` for any other kind."""
        try:
            return cls(text.strip())
        except ValueError:
            return None


SV_TYPE_LABELS = {
    SVType.INV: "Inversion",
    SVType.TRANS: "Translocation",
    SVType.DUP: "Duplication",
    SVType.INVDP: "Inverted Dup",
    SVType.INVTR: "Inverted Trans",
}

# Legend order.
SV_TYPE_ORDER = [SVType.INV, SVType.TRANS, SVType.DUP, SVType.INVDP, SVType.INVTR]


class DropReason(Enum):
    UNSUPPORTED_TYPE = "unsupported_type"
    UNKNOWN_CHROMOSOME = "unknown_chromosome"
    OUT_OF_BOUNDS = "out_of_bounds"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class SVRecord:
    """A validated structural variant between reference (A) and query (B)."""

    chr_a: str
    start_a: Number
    end_a: Number
    chr_b: str
    start_b: Number
    end_b: Number
    sv_type: SVType
    line_number: int = 0

    def to_row(self) -> Tuple:
        return (
            self.chr_a, self.start_a, self.end_a,
            self.chr_b, self.start_b, self.end_b,
            self.sv_type.value,
        )


@dataclass
class FilterSummary:
    """Aggregate counts of kept and silently dropped rows."""

    total_rows: int = 0
    kept: int = 0
    dropped: Dict[DropReason, int] = field(
        default_factory=lambda: {reason: 0 for reason in DropReason}
    )

    def drop(self, reason: DropReason) -> None:
        self.dropped[reason] += 1

    @property
    def total_dropped(self) -> int:
        return sum(self.dropped.values())

    def to_dict(self) -> Dict:
        data = {"total_rows": self.total_rows, "kept": self.kept}
        data.update({reason.value: count for reason, count in self.dropped.items()})
        return data

    def to_text(self) -> str:
        lines = [
            f"Rows read:          {self.total_rows}",
            f"Valid SVs:          {self.kept}",
            f"Unsupported type:   {self.dropped[DropReason.UNSUPPORTED_TYPE]}",
            f"Unknown chromosome: {self.dropped[DropReason.UNKNOWN_CHROMOSOME]}",
            f"Out of bounds:      {self.dropped[DropReason.OUT_OF_BOUNDS]}",
        ]
        if self.dropped[DropReason.MALFORMED]:
            lines.append(f"Malformed, skipped: {self.dropped[DropReason.MALFORMED]}")
        return "\n".join(lines)


class ValidatedSVTable:
    """Ordered SV records whose chromosomes are registry members.

    Chromosome columns behave as categorical values with levels fixed to
    the registry order (see :meth:`chromosome_codes`).
    """

    def __init__(
        self,
        records: Sequence[SVRecord],
        registry: ChromosomeRegistry,
        summary: Optional[FilterSummary] = None,
    ):
        self.records: Tuple[SVRecord, ...] = tuple(records)
        self.registry = registry
        if summary is None:
            summary = FilterSummary(total_rows=len(self.records), kept=len(self.records))
        self.summary = summary

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[SVRecord]:
        return iter(self.records)

    def __getitem__(self, i: int) -> SVRecord:
        return self.records[i]

    def __repr__(self) -> str:
        return f"ValidatedSVTable({len(self)} records)"

    @property
    def levels(self) -> List[str]:
        return self.registry.names

    def chromosome_codes(self) -> Tuple[np.ndarray, np.ndarray]:
        """Factor codes of ``chr_a`` and ``chr_b`` in registry order."""
        codes_a = np.array([self.registry.index(r.chr_a) for r in self.records], dtype=np.int64)
        codes_b = np.array([self.registry.index(r.chr_b) for r in self.records], dtype=np.int64)
        return codes_a, codes_b

    def count_by_type(self) -> Dict[SVType, int]:
        counts = {sv_type: 0 for sv_type in SV_TYPE_ORDER}
        for record in self.records:
            counts[record.sv_type] += 1
        return counts

    def to_rows(self) -> List[Tuple]:
        return [record.to_row() for record in self.records]


def order_span(start: Number, end: Number) -> Tuple[Number, Number]:
    """Return ``(min, max)`` of a coordinate pair."""
    return min(start, end), max(start, end)


def parse_sv_row(
    fields: Sequence[str], registry: ChromosomeRegistry,
    bounds: str = "padded", line_number: int = 0,
) -> Union[SVRecord, DropReason]:
    """Map one split row to an :class:`SVRecord` or the reason it is dropped.

    Raises :class:`MalformedInputError` (without location) when the row is
    too short or a coordinate is not a number.
    """
    if len(fields) < MIN_COLUMNS:
        raise MalformedInputError(
            f"expected at least {MIN_COLUMNS} tab-separated fields, found {len(fields)}"
        )

    sv_type = SVType.parse(fields[COL_TYPE])
    if sv_type is None:
        return DropReason.UNSUPPORTED_TYPE

    start_a, end_a = order_span(parse_number(fields[COL_START_A]), parse_number(fields[COL_END_A]))
    start_b, end_b = order_span(parse_number(fields[COL_START_B]), parse_number(fields[COL_END_B]))

    chr_a = normalize_chromosome_name(fields[COL_CHR_A])
    chr_b = normalize_chromosome_name(fields[COL_CHR_B])
    if chr_a not in registry or chr_b not in registry:
        return DropReason.UNKNOWN_CHROMOSOME

    if not (_within(registry, chr_a, start_a, end_a, bounds)
            and _within(registry, chr_b, start_b, end_b, bounds)):
        return DropReason.OUT_OF_BOUNDS

    return SVRecord(
        chr_a=chr_a, start_a=start_a, end_a=end_a,
        chr_b=chr_b, start_b=start_b, end_b=end_b,
        sv_type=sv_type, line_number=line_number,
    )


def _within(registry: ChromosomeRegistry, name: str, start: Number, end: Number, bounds: str) -> bool:
    # "padded" compares against the stored display length, which is 10%
    # looser than the genome; "raw" uses the length from the file.
    limit = registry.length(name) if bounds == "padded" else registry.raw_length(name)
    return start >= 1 and end <= limit


def load_sv_table(
    filepath: Union[str, Path],
    registry: ChromosomeRegistry,
    bounds: str = "padded",
    on_malformed: str = "abort",
) -> ValidatedSVTable:
    """Load and validate a tab-separated SV caller output file.

    Columns used (1-based): 1-3 reference chromosome/start/end, 7-9 query
    chromosome/start/end, 13 event type. Input order is preserved.

    *bounds* selects the length coordinates are checked against:
    ``"padded"`` (registry display length) or ``"raw"``. *on_malformed* is
    ``"abort"`` to raise :class:`MalformedInputError` at the first bad row
    or ``"skip"`` to count it and continue.
    """
    if bounds not in BOUNDS_MODES:
        raise ValueError(f"bounds must be one of {BOUNDS_MODES}, got {bounds!r}")
    if on_malformed not in MALFORMED_POLICIES:
        raise ValueError(f"on_malformed must be one of {MALFORMED_POLICIES}, got {on_malformed!r}")

    records: List[SVRecord] = []
    summary = FilterSummary()

    for line_number, fields in read_delimited(filepath, sep="\t"):
        summary.total_rows += 1
        try:
            result = parse_sv_row(fields, registry, bounds=bounds, line_number=line_number)
        except MalformedInputError as exc:
            if on_malformed == "abort":
                raise exc.at(filepath, line_number) from None
            summary.drop(DropReason.MALFORMED)
            continue

        if isinstance(result, DropReason):
            summary.drop(result)
        else:
            records.append(result)

    summary.kept = len(records)
    return ValidatedSVTable(records, registry, summary)
