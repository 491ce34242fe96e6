"""Chromosome registry: names and display lengths from a length file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple, Union

from syriplot.errors import DuplicateChromosomeError, MalformedInputError
from syriplot.io import normalize_chromosome_name, parse_number, read_delimited

# Proportional enlargement of every chromosome to leave visual margin.
DEFAULT_PADDING = 1.10


@dataclass(frozen=True)
class ChromosomeEntry:
    """One chromosome of the reference/query assembly."""

    name: str
    length: float  # padded display length
    raw_length: float


class ChromosomeRegistry:
    """Ordered, immutable set of chromosomes.

    The order is the input-file order and is the canonical order used for
    axis placement, circos sectors and factor codes.
    """

    def __init__(self, entries: Sequence[ChromosomeEntry], padding: float = DEFAULT_PADDING):
        self._entries: Tuple[ChromosomeEntry, ...] = tuple(entries)
        self._index: Dict[str, int] = {}
        for i, entry in enumerate(self._entries):
            if entry.name in self._index:
                raise DuplicateChromosomeError(entry.name)
            if entry.length <= 0:
                raise ValueError(f"chromosome {entry.name!r} must have a positive length")
            self._index[entry.name] = i
        self.padding = padding

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChromosomeEntry]:
        return iter(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __getitem__(self, name: str) -> ChromosomeEntry:
        return self._entries[self._index[name]]

    def __repr__(self) -> str:
        return f"ChromosomeRegistry({len(self)} chromosomes, padding={self.padding})"

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    @property
    def total_length(self) -> float:
        return sum(entry.length for entry in self._entries)

    def index(self, name: str) -> int:
        """Factor code of *name* (its position in registry order)."""
        return self._index[name]

    def length(self, name: str) -> float:
        return self[name].length

    def raw_length(self, name: str) -> float:
        return self[name].raw_length


def load_registry(
    filepath: Union[str, Path], padding: float = DEFAULT_PADDING,
) -> ChromosomeRegistry:
    """Load a two-column ``<name> <length>`` file into a registry.

    Fields are separated by tabs or spaces and there is no header. Lengths
    may carry quotes and comma thousands-separators. Names are uppercased
    and every length is multiplied by *padding*.

    A line without exactly two fields, an unparseable or zero length, or an
    empty file raises :class:`MalformedInputError`; a repeated name raises
    :class:`DuplicateChromosomeError`. Nothing is returned partially.
    """
    if padding <= 0:
        raise ValueError(f"padding must be positive, got {padding}")

    entries: List[ChromosomeEntry] = []
    seen: set[str] = set()

    for line_number, fields in read_delimited(filepath, sep=None):
        if len(fields) != 2:
            raise MalformedInputError(
                f"expected 2 fields (name, length), found {len(fields)}",
                path=filepath, line=line_number,
            )
        name_text, length_text = fields
        try:
            raw_length = parse_number(length_text)
        except MalformedInputError as exc:
            raise exc.at(filepath, line_number) from None
        if raw_length == 0:
            raise MalformedInputError(
                f"chromosome length must be positive, got {length_text!r}",
                path=filepath, line=line_number,
            )

        name = normalize_chromosome_name(name_text)
        if name in seen:
            raise DuplicateChromosomeError(name, path=filepath, line=line_number)
        seen.add(name)
        entries.append(ChromosomeEntry(name=name, length=raw_length * padding, raw_length=raw_length))

    if not entries:
        raise MalformedInputError("no chromosomes found", path=filepath)

    return ChromosomeRegistry(entries, padding=padding)
