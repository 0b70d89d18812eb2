"""Explicit read position over an immutable command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DIGITS = frozenset("0123456789")


@dataclass(slots=True)
class InputCursor:
    """Index into ``text``; grammar rules advance it as they consume input."""

    text: str
    pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Return the current character, or ``""`` at end of input."""

        if self.at_end():
            return ""
        return self.text[self.pos]

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def take(self) -> str:
        char = self.peek()
        self.advance()
        return char

    def read_number(self) -> Optional[int]:
        """Consume a run of decimal digits; ``None`` if there is none."""

        start = self.pos
        while self.peek() in DIGITS:
            self.pos += 1
        if self.pos == start:
            return None
        return int(self.text[start : self.pos])

    def read_until(self, delimiter: str) -> str:
        """Consume up to ``delimiter`` (or end of input) and skip the delimiter."""

        end = self.text.find(delimiter, self.pos)
        if end == -1:
            end = len(self.text)
        chunk = self.text[self.pos : end]
        self.pos = min(end + 1, len(self.text))
        return chunk

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def rest(self) -> str:
        return self.text[self.pos :]
