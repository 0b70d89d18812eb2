"""Current address and range state for an editing session."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class AddressState:
    """Mutable ``dot`` plus the most recently resolved range.

    ``dot`` is 0 only while the store is empty.
    """

    dot: int = 1
    begin: int = 0
    end: int = 0

    def set_range(self, begin: int, end: int) -> None:
        self.dot = self.begin = begin
        self.end = end

    def reset(self, line_count: int) -> None:
        self.dot = 1 if line_count else 0
        self.begin = self.end = 0

    def clamp(self, line_count: int) -> None:
        if line_count == 0:
            self.dot = 0
        else:
            self.dot = min(max(self.dot, 1), line_count)
