"""Line-at-a-time command interpreter."""

from __future__ import annotations

from xd.addressing import InputCursor, resolve_range
from xd.errors import FileOpenError, InvalidCommand, XdError
from xd.runtime import telemetry

from .base import CommandResult, Session
from .directives import is_plugin_directive, parse_plugin_directive
from .handlers import edit_target, lookup_handler, show_last_error

FAILURE_INDICATOR = "?"


class CommandInterpreter:
    """Threads one input line at a time through addressing and dispatch.

    Failures never escape ``execute``: the error is stored on the session as
    ``last_error``, ``?`` is written, and a failed result is returned.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def execute(self, raw_line: str) -> CommandResult:
        line = raw_line.rstrip("\r\n")
        self.session.bus.emit("command.submit", line)
        try:
            with telemetry.span(
                "commands::execute",
                component="commands",
                metadata={"line": line, "dot": self.session.address.dot},
            ):
                return self._dispatch(line)
        except FileOpenError as exc:
            self.session.warn(str(exc))
            return self._fail(exc)
        except XdError as exc:
            return self._fail(exc)

    def _dispatch(self, line: str) -> CommandResult:
        session = self.session
        if is_plugin_directive(line):
            session.plugin_config = parse_plugin_directive(line)
            return CommandResult(
                ok=True,
                status="plugin_config",
                message=session.plugin_config.template,
                dot=session.address.dot,
            )

        cursor = InputCursor(line)
        head = cursor.peek()
        if head == "h":
            return show_last_error(session)
        if head == "e":
            cursor.advance()
            cursor.skip_whitespace()
            return edit_target(session, cursor.rest())

        resolve_range(cursor, session.address, session.store)
        handler = lookup_handler(cursor.peek())
        if handler is None:
            raise InvalidCommand()
        return handler(session, cursor)

    def _fail(self, error: XdError) -> CommandResult:
        session = self.session
        session.last_error = error
        session.write_line(FAILURE_INDICATOR)
        session.bus.emit("command.error", error)
        telemetry.record_event(
            "command.error",
            level="debug",
            data={"kind": type(error).__name__, "message": str(error)},
        )
        return CommandResult(
            ok=False,
            status="command_error",
            message=str(error),
            dot=session.address.dot,
        )


__all__ = ["CommandInterpreter", "FAILURE_INDICATOR"]
