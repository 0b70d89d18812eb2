"""Standard-stream front end for the editor."""

from .controller import StdioEditor

__all__ = ["StdioEditor"]
