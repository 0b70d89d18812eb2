"""Minimal line-addressed text editor with pipe-protocol plugins."""

__all__ = [
    "adapters",
    "addressing",
    "buffer",
    "commands",
    "config",
    "errors",
    "plugin",
    "runtime",
]

__version__ = "0.1.0"
