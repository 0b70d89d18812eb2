"""Read-eval loop that feeds text streams through the interpreter."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Iterable, Optional

from xd.buffer import TEXT_ERRORS, load_file
from xd.commands import CommandInterpreter, Session
from xd.errors import FileOpenError
from xd.runtime import telemetry


class StdioEditor(AbstractContextManager["StdioEditor"]):
    """Owns a session and relays its bus events to telemetry."""

    def __init__(self, session: Optional[Session] = None) -> None:
        self.session = session or Session()
        self.interpreter = CommandInterpreter(self.session)
        self.logger = telemetry.get_logger("xd.adapters.stdio")
        self._subscribe_events()

    def load_initial(self, path: str) -> int:
        """Populate the store from ``path`` and report its byte count."""

        session = self.session
        session.filename = path
        try:
            session.replace_store(load_file(path, encoding=session.config.encoding))
        except FileOpenError as exc:
            session.last_error = exc
            session.warn(str(exc))
        session.address.reset(session.store.line_count())
        nbytes = session.store.byte_count()
        session.write_line(str(nbytes))
        return nbytes

    def replay_rc(self, path: Optional[str | os.PathLike[str]]) -> int:
        """Run each line of ``path`` as a command; a missing file is ignored."""

        if path is None:
            return 0
        try:
            with open(
                path, encoding=self.session.config.encoding, errors=TEXT_ERRORS
            ) as fp:
                lines = fp.readlines()
        except OSError:
            return 0
        with telemetry.span(
            "stdio::replay_rc", component="stdio", metadata={"path": os.fspath(path)}
        ):
            self.run(lines)
        return len(lines)

    def run(self, lines: Iterable[str]) -> int:
        """Execute each line in turn; return how many were run."""

        count = 0
        for line in lines:
            self.interpreter.execute(line)
            self.session.output.flush()
            count += 1
        return count

    def close(self) -> None:
        self.session.close()

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "command.submit",
            "command.error",
            "buffer.replace",
            "plugin.spawn",
            "plugin.close",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.logger.debug(f"event -> {name} payload={_describe(payload)}")


def _describe(payload: object | None) -> str:
    if payload is None or isinstance(payload, str):
        return repr(payload)
    line_count = getattr(payload, "line_count", None)
    if callable(line_count):
        return f"<{type(payload).__name__} lines={line_count()}>"
    target = getattr(payload, "target", None)
    if target is not None:
        return f"<{type(payload).__name__} target={target!r}>"
    return f"<{type(payload).__name__} {payload}>"


__all__ = ["StdioEditor"]
