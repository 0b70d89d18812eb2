"""Address-expression cursor and resolver."""

from .cursor import InputCursor
from .resolver import (
    AddressRange,
    compile_pattern,
    resolve_one,
    resolve_range,
    search_forward,
)

__all__ = [
    "InputCursor",
    "AddressRange",
    "compile_pattern",
    "resolve_one",
    "resolve_range",
    "search_forward",
]
