"""Handlers for the single-letter commands that follow an address range."""

from __future__ import annotations

from typing import Callable, Dict

from xd.addressing import InputCursor
from xd.buffer import LineStore, load_file
from xd.errors import (
    InvalidAddress,
    InvalidCommandSuffix,
    NoActivePlugin,
    NoCurrentFilename,
)
from xd.plugin import PASSTHROUGH, REFRESH, PluginSession, spawn

from .base import CommandResult, Session
from .flags import PrintFlag, read_flags

CommandHandler = Callable[[Session, InputCursor], CommandResult]


def print_lines(session: Session, begin: int, end: int, flags: PrintFlag) -> int:
    """Write lines ``begin..end`` and return the new dot.

    The new dot is the line after ``end``, capped at the last line.
    """

    store = session.store
    count = store.line_count()
    if begin < 1 or end > count or begin > end:
        raise InvalidAddress()
    numbered = bool(flags & PrintFlag.NUMBERED)
    for index in range(begin, end + 1):
        text = store.get(index)
        session.write_line(f"{index}\t{text}" if numbered else text)
    session.address.dot = min(end + 1, count)
    return session.address.dot


def _handle_print(session: Session, cursor: InputCursor) -> CommandResult:
    command = cursor.peek()
    flags = read_flags(cursor)
    if command == "n":
        flags |= PrintFlag.NUMBERED
    begin, end = session.address.begin, session.address.end
    dot = print_lines(session, begin, end, flags)
    return CommandResult(
        ok=True, status="print", message=command, dot=dot, lines=end - begin + 1
    )


def _handle_current(session: Session, cursor: InputCursor) -> CommandResult:
    del cursor
    current = session.address.dot
    dot = print_lines(session, current, current, PrintFlag.NONE)
    return CommandResult(ok=True, status="print_current", dot=dot, lines=1)


def _require_plugin(session: Session) -> PluginSession:
    plugin = session.active_plugin()
    if plugin is None:
        raise NoActivePlugin()
    return plugin


def _expect_end(cursor: InputCursor) -> None:
    if not cursor.at_end():
        raise InvalidCommandSuffix()


def _handle_refresh(session: Session, cursor: InputCursor) -> CommandResult:
    cursor.advance()
    _expect_end(cursor)
    plugin = _require_plugin(session)
    try:
        plugin.request(REFRESH, session.address.dot)
        store = plugin.request_full_refresh()
    finally:
        session.active_plugin()
    session.replace_store(store)
    session.address.clamp(store.line_count())
    return CommandResult(
        ok=True, status="refresh", dot=session.address.dot, lines=store.line_count()
    )


def _handle_passthrough(session: Session, cursor: InputCursor) -> CommandResult:
    cursor.advance()
    _expect_end(cursor)
    plugin = _require_plugin(session)
    try:
        plugin.request(PASSTHROUGH, session.address.dot)
        forwarded = plugin.request_passthrough_reply(session.write_line)
    finally:
        session.active_plugin()
    return CommandResult(
        ok=True, status="passthrough", dot=session.address.dot, lines=forwarded
    )


def edit_target(session: Session, target: str) -> CommandResult:
    """Replace the store with ``target``'s lines, via a plugin when it matches.

    An empty ``target`` re-opens the remembered one.
    """

    if not target:
        if session.filename is None:
            raise NoCurrentFilename()
        target = session.filename

    config = session.config
    session.retire_plugin()
    session.replace_store(LineStore(encoding=config.encoding))
    session.address.reset(0)
    session.filename = target

    plugin_config = session.plugin_config
    if plugin_config is not None and plugin_config.matches(target):
        plugin = spawn(
            plugin_config.template,
            target,
            timeout=config.plugin_timeout,
            reap_timeout=config.reap_timeout,
            encoding=config.encoding,
        )
        session.plugin = plugin
        session.bus.emit("plugin.spawn", plugin)
        session.replace_store(plugin.view)
        status = "edit_plugin"
    else:
        session.replace_store(load_file(target, encoding=config.encoding))
        status = "edit"

    session.address.reset(session.store.line_count())
    return CommandResult(
        ok=True,
        status=status,
        message=target,
        dot=session.address.dot,
        lines=session.store.line_count(),
    )


def show_last_error(session: Session) -> CommandResult:
    error = session.last_error
    message = "no error" if error is None else str(error)
    session.write_line(message)
    return CommandResult(ok=True, status="help", message=message, dot=session.address.dot)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "p": _handle_print,
    "n": _handle_print,
    "x": _handle_refresh,
    "l": _handle_passthrough,
    "": _handle_current,
}


def lookup_handler(command: str) -> CommandHandler | None:
    return _COMMAND_HANDLERS.get(command)


__all__ = [
    "CommandHandler",
    "edit_target",
    "lookup_handler",
    "print_lines",
    "show_last_error",
]
