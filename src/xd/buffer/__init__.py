"""Line storage, file loading, and address state."""

from .loader import load_file
from .state import AddressState
from .store import TEXT_ERRORS, LineStore

__all__ = [
    "AddressState",
    "LineStore",
    "TEXT_ERRORS",
    "load_file",
]
