"""Address-expression grammar and resolution.

Grammar, consumed left to right, one operator per step::

    address  := [leading] offset*
    leading  := digits | "." | "$" | "/" pattern ["/"] | "?" pattern ["?"]
    offset   := ("+" | "-") [digits]

A leading form is only valid as the first token. ``/`` and ``?`` both search
forward from the address accumulated so far. Resolution stops at the first
character that is not an address operator; the result must lie in
``[1, line_count]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern

from xd.buffer import AddressState, LineStore
from xd.errors import InvalidAddress, NoMatch, PatternCompileError
from xd.runtime.telemetry import span

from .cursor import DIGITS, InputCursor

PATTERN_DELIMITERS = frozenset("/?")


@dataclass(frozen=True, slots=True)
class AddressRange:
    """Outcome of ``resolve_range``: how many addresses were given, and the span."""

    count: int
    begin: int
    end: int


def compile_pattern(cursor: InputCursor) -> Pattern[str]:
    """Consume ``<delim>pattern[<delim>]`` and compile the pattern."""

    delimiter = cursor.take()
    source = cursor.read_until(delimiter)
    try:
        return re.compile(source)
    except re.error as exc:
        raise PatternCompileError(str(exc), pattern=source) from exc


def search_forward(regex: Pattern[str], start: int, store: LineStore) -> int:
    """Return the first line at or after ``start`` whose text matches."""

    for index in range(max(start, 1), store.line_count() + 1):
        if regex.search(store.get(index)):
            return index
    raise NoMatch()


def resolve_one(
    cursor: InputCursor, current: int, last: int, store: LineStore
) -> int:
    """Resolve a single address expression starting at ``cursor``."""

    address = current
    first = True
    while not cursor.at_end():
        char = cursor.peek()
        if char in "+-":
            cursor.advance()
            magnitude = cursor.read_number()
            step = 1 if magnitude is None else magnitude
            address += -step if char == "-" else step
        elif char in DIGITS:
            if not first:
                raise InvalidAddress()
            number = cursor.read_number()
            assert number is not None
            address = number
        elif char in ".$":
            if not first:
                raise InvalidAddress()
            address = current if char == "." else last
            cursor.advance()
        elif char in PATTERN_DELIMITERS:
            if not first:
                raise InvalidAddress()
            regex = compile_pattern(cursor)
            address = search_forward(regex, address, store)
        else:
            break
        first = False

    if address < 1 or address > last:
        raise InvalidAddress()
    return address


def resolve_range(
    cursor: InputCursor, state: AddressState, store: LineStore
) -> AddressRange:
    """Resolve ``address[,address]`` and commit it to ``state`` on success.

    The second address is resolved relative to the first. ``state`` is left
    untouched when either address fails.
    """

    with span(
        "addressing::resolve_range",
        component="addressing",
        metadata={"input": cursor.rest(), "dot": state.dot},
    ) as handle:
        last = store.line_count()
        begin = resolve_one(cursor, state.dot, last, store)
        end = begin
        count = 1
        if cursor.peek() == ",":
            cursor.advance()
            end = resolve_one(cursor, begin, last, store)
            count = 2
        if begin > end:
            raise InvalidAddress()

        state.set_range(begin, end)
        handle.add_metadata("range", f"{begin},{end}")
        return AddressRange(count=count, begin=begin, end=end)


__all__ = [
    "AddressRange",
    "compile_pattern",
    "resolve_one",
    "resolve_range",
    "search_forward",
]
