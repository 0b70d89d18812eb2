"""Failure taxonomy shared by the grammar, interpreter and plugin layers.

Every failure is recovered at the granularity of one input line: the
interpreter stores the raised error on the session (``Session.last_error``)
and shows a short ``?`` indicator. ``str(error)`` is the text ``h`` prints.
"""

from __future__ import annotations


class XdError(RuntimeError):
    """Base class for recoverable editor failures."""

    default_message = "error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidAddress(XdError):
    """Malformed or out-of-range address token."""

    default_message = "invalid address"


class NoMatch(XdError):
    """A forward search reached the end of the buffer without a match."""

    default_message = "no match"


class PatternCompileError(XdError):
    """A regular expression failed to compile; carries the engine's message."""

    default_message = "invalid pattern"

    def __init__(self, message: str | None = None, *, pattern: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern


class InvalidCommand(XdError):
    default_message = "invalid command"


class InvalidCommandSuffix(XdError):
    default_message = "invalid command suffix"


class NoCurrentFilename(XdError):
    default_message = "no current filename"


class FileOpenError(XdError):
    """An edit target could not be opened. Reported as a warning."""

    default_message = "cannot open file"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class DirectiveError(XdError):
    """Malformed ``plugin`` directive."""

    default_message = "invalid plugin directive"


class ChildSpawnError(XdError):
    """The plugin process could not be started."""

    default_message = "cannot spawn plugin"

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"{command}: {reason}")
        self.command = command
        self.reason = reason


class NoActivePlugin(XdError):
    default_message = "no active plugin"


class PluginTimeout(XdError):
    """A plugin transaction exceeded its configured timeout."""

    default_message = "plugin timed out"

    def __init__(self, timeout: float) -> None:
        super().__init__(f"plugin timed out after {timeout:g}s")
        self.timeout = timeout


__all__ = [
    "XdError",
    "InvalidAddress",
    "NoMatch",
    "PatternCompileError",
    "InvalidCommand",
    "InvalidCommandSuffix",
    "NoCurrentFilename",
    "FileOpenError",
    "DirectiveError",
    "ChildSpawnError",
    "NoActivePlugin",
    "PluginTimeout",
]
