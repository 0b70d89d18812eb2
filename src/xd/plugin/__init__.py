"""Plugin processes and the sentinel-framed pipe protocol."""

from .framer import StreamFramer
from .session import (
    PASSTHROUGH,
    REFRESH,
    PluginSession,
    generate_sentinel,
    spawn,
)

__all__ = [
    "StreamFramer",
    "PluginSession",
    "REFRESH",
    "PASSTHROUGH",
    "generate_sentinel",
    "spawn",
]
