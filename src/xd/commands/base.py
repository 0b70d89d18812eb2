"""Session state, event bus, and per-line results shared by command handlers."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, TextIO

from xd.buffer import AddressState, LineStore
from xd.config import EditorConfig
from xd.errors import XdError
from xd.plugin import PluginSession

from .directives import PluginConfig


@dataclass(slots=True)
class CommandResult:
    """Outcome of interpreting one input line."""

    ok: bool
    status: str = "ok"
    message: Optional[str] = None
    dot: int = 0
    lines: int = 0


class SessionBus:
    """Minimal event bus letting drivers observe the interpreter."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class Session:
    """Everything one editing session owns.

    Only the single control loop touches a session, so nothing here is locked.
    """

    store: LineStore = field(default_factory=LineStore)
    address: AddressState = field(default_factory=AddressState)
    config: EditorConfig = field(default_factory=EditorConfig)
    bus: SessionBus = field(default_factory=SessionBus)
    output: TextIO = field(default_factory=lambda: sys.stdout)
    errors: TextIO = field(default_factory=lambda: sys.stderr)
    plugin_config: Optional[PluginConfig] = None
    plugin: Optional[PluginSession] = None
    filename: Optional[str] = None
    last_error: Optional[XdError] = None

    def write_line(self, text: str) -> None:
        self.output.write(f"{text}\n")

    def warn(self, text: str) -> None:
        self.errors.write(f"xd: {text}\n")

    def replace_store(self, store: LineStore) -> None:
        previous = self.store
        self.store = store
        if previous is not store:
            previous.destroy()
        self.bus.emit("buffer.replace", store)

    def active_plugin(self) -> Optional[PluginSession]:
        if self.plugin is not None and self.plugin.closed:
            self.plugin = None
        return self.plugin

    def retire_plugin(self) -> None:
        plugin, self.plugin = self.plugin, None
        if plugin is not None:
            plugin.close()
            self.bus.emit("plugin.close", plugin)

    def close(self) -> None:
        self.retire_plugin()


__all__ = ["CommandResult", "Session", "SessionBus"]
