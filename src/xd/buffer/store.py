"""Ordered line storage with byte-count bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence


# Undecodable input bytes round-trip through lone surrogates.
TEXT_ERRORS = "surrogateescape"


def _line_bytes(line: str, encoding: str) -> int:
    return len(line.encode(encoding, errors=TEXT_ERRORS)) + 1  # newline


@dataclass(slots=True)
class LineStore:
    """Append-only list of text lines, 1-indexed for callers.

    The store is never edited line-by-line from outside the interpreter; a new
    edit target replaces it wholesale.
    """

    _lines: List[str] = field(default_factory=list)
    _nbytes: int = 0
    encoding: str = "utf-8"

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, encoding: str = "utf-8") -> "LineStore":
        store = cls(encoding=encoding)
        for line in lines:
            store.append(line)
        return store

    def append(self, line: str) -> None:
        self._lines.append(line)
        self._nbytes += _line_bytes(line, self.encoding)

    def get(self, index: int) -> str:
        """Return line ``index`` (1-based). Callers keep ``index`` in range."""

        return self._lines[index - 1]

    def line_count(self) -> int:
        return len(self._lines)

    def byte_count(self) -> int:
        return self._nbytes

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def destroy(self) -> None:
        self._lines.clear()
        self._nbytes = 0

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)
