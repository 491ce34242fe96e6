"""Exceptions raised while reading chromosome-length and SV input files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class SyriplotError(ValueError):
    """Base class for input problems that stop a run."""


class MalformedInputError(SyriplotError):
    """A required field is missing or cannot be parsed.

    *path* and *line* (1-based) are attached when known so the operator can
    find the offending row.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        line: Optional[int] = None,
    ):
        self.message = message
        self.path = str(path) if path is not None else None
        self.line = line
        super().__init__(_with_location(message, self.path, line))

    def at(self, path: Union[str, Path], line: int) -> "MalformedInputError":
        """Return a copy of this error located at *path*:*line*."""
        return MalformedInputError(self.message, path=path, line=line)


class DuplicateChromosomeError(SyriplotError):
    """The same (normalized) chromosome name appears twice in a length file."""

    def __init__(
        self,
        name: str,
        path: Optional[Union[str, Path]] = None,
        line: Optional[int] = None,
    ):
        self.name = name
        self.path = str(path) if path is not None else None
        self.line = line
        super().__init__(_with_location(f"duplicate chromosome name {name!r}", self.path, line))


def _with_location(message: str, path: Optional[str], line: Optional[int]) -> str:
    if path is None:
        return message
    if line is None:
        return f"{path}: {message}"
    return f"{path}:{line}: {message}"
