"""Print-command suffix flags."""

from __future__ import annotations

from enum import IntFlag

from xd.addressing import InputCursor
from xd.errors import InvalidCommandSuffix


class PrintFlag(IntFlag):
    NONE = 0
    PRINT = 1
    UNAMBIGUOUS = 2
    NUMBERED = 4


_FLAG_LETTERS = {
    "p": PrintFlag.PRINT,
    "l": PrintFlag.UNAMBIGUOUS,
    "n": PrintFlag.NUMBERED,
}


def read_flags(cursor: InputCursor, flags: PrintFlag = PrintFlag.NONE) -> PrintFlag:
    """Consume ``[pln]*`` from ``cursor``; anything left over is an error.

    The cursor starts on the command letter itself, so ``n`` sets NUMBERED.
    """

    while cursor.peek() in _FLAG_LETTERS:
        flags |= _FLAG_LETTERS[cursor.take()]
    if not cursor.at_end():
        raise InvalidCommandSuffix()
    return flags


__all__ = ["PrintFlag", "read_flags"]
