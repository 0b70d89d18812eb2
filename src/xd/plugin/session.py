"""Plugin child processes and the sentinel-framed request/response protocol.

A plugin is started as ``<template> -p <sentinel> <target>``. It reads
``x <address>\\n`` or ``l <address>\\n`` requests on stdin and answers with
zero or more newline-terminated lines followed by the bare sentinel (no
trailing newline).
"""

from __future__ import annotations

import random
import select
import subprocess
import time
from contextlib import AbstractContextManager, suppress
from typing import BinaryIO, Callable, Optional

from xd.buffer import TEXT_ERRORS, LineStore
from xd.errors import ChildSpawnError, NoActivePlugin, PluginTimeout
from xd.runtime import telemetry

from .framer import StreamFramer

LineSink = Callable[[str], None]

REFRESH = "x"
PASSTHROUGH = "l"


def generate_sentinel() -> str:
    """Return a short one-shot end-of-response marker."""

    return f"{random.getrandbits(32):08x}"


class PluginSession(AbstractContextManager["PluginSession"]):
    """Owns a plugin child and both of its pipes until ``close``."""

    def __init__(
        self,
        process: subprocess.Popen,
        sentinel: str,
        *,
        command: str,
        target: str,
        timeout: Optional[float] = None,
        reap_timeout: float = 1.0,
        encoding: str = "utf-8",
    ) -> None:
        if process.stdin is None or process.stdout is None:
            raise ValueError("plugin process must be started with both pipes")
        self.process = process
        self.sentinel = sentinel
        self.command = command
        self.target = target
        self.timeout = timeout
        self.reap_timeout = reap_timeout
        self.encoding = encoding
        self.view = LineStore(encoding=encoding)
        self._read: BinaryIO = process.stdout
        self._write: BinaryIO = process.stdin
        self._sentinel_bytes = sentinel.encode("ascii")
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send_command(self, text: str) -> None:
        """Write one formatted request to the child."""

        self._require_open()
        data = memoryview(text.encode(self.encoding, errors=TEXT_ERRORS))
        try:
            while data:
                written = self._write.write(data)
                data = data[written or 0 :]
            self._write.flush()
        except BrokenPipeError as exc:
            self.close()
            raise NoActivePlugin("plugin exited") from exc

    def request(self, kind: str, address: int) -> None:
        self.send_command(f"{kind} {address}\n")

    def request_full_refresh(self) -> LineStore:
        """Collect one response into a new store, which also becomes ``view``."""

        store = LineStore(encoding=self.encoding)
        self._transact(store.append, label="refresh")
        self.view = store
        return store

    def request_passthrough_reply(self, sink: LineSink) -> int:
        """Forward one response line by line to ``sink``; return the line count."""

        forwarded = 0

        def forward(line: str) -> None:
            nonlocal forwarded
            forwarded += 1
            sink(line)

        self._transact(forward, label="passthrough")
        return forwarded

    def _transact(self, sink: LineSink, *, label: str) -> bool:
        self._require_open()
        framer = StreamFramer()
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        with telemetry.span(
            f"plugin::{label}",
            component="plugin",
            metadata={"command": self.command, "target": self.target},
        ) as handle:
            lines = 0
            while True:
                line = framer.take_next_complete_line()
                while line is not None:
                    sink(line.decode(self.encoding, errors=TEXT_ERRORS))
                    lines += 1
                    line = framer.take_next_complete_line()

                if framer.peek_partial_fragment() == self._sentinel_bytes:
                    handle.add_metadata("lines", lines)
                    return True

                self._wait_readable(deadline)
                if framer.fill_from_channel(self._read) == 0:
                    handle.add_metadata("lines", lines)
                    telemetry.record_event(
                        "plugin.channel_closed",
                        level="warning",
                        data={"command": self.command, "lines": lines},
                    )
                    self.close()
                    return False

    def _wait_readable(self, deadline: Optional[float]) -> None:
        if deadline is None:
            return
        remaining = deadline - time.monotonic()
        if remaining > 0:
            ready, _, _ = select.select([self._read], [], [], remaining)
            if ready:
                return
        assert self.timeout is not None
        self.close()
        raise PluginTimeout(self.timeout)

    def _require_open(self) -> None:
        if self._closed:
            raise NoActivePlugin()

    def close(self) -> Optional[int]:
        """Release both pipes and reap the child; safe to call twice."""

        if self._closed:
            return self.process.returncode
        self._closed = True
        with suppress(OSError):
            self._write.close()
        with suppress(OSError):
            self._read.close()
        try:
            returncode = self.process.wait(timeout=self.reap_timeout)
        except subprocess.TimeoutExpired:
            self.process.kill()
            returncode = self.process.wait()
        telemetry.record_event(
            "plugin.close",
            level="debug",
            data={"command": self.command, "returncode": returncode},
        )
        return returncode

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


def spawn(
    command: str,
    target: str,
    *,
    timeout: Optional[float] = None,
    reap_timeout: float = 1.0,
    encoding: str = "utf-8",
) -> PluginSession:
    """Start a plugin for ``target`` and load its initial response into ``view``."""

    sentinel = generate_sentinel()
    with telemetry.span(
        "plugin::spawn",
        component="plugin",
        metadata={"command": command, "target": target},
    ) as handle:
        try:
            process = subprocess.Popen(
                [command, "-p", sentinel, target],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                bufsize=0,
            )
        except OSError as exc:
            handle.add_metadata("error", exc.strerror or str(exc))
            raise ChildSpawnError(command, exc.strerror or str(exc)) from exc

        session = PluginSession(
            process,
            sentinel,
            command=command,
            target=target,
            timeout=timeout,
            reap_timeout=reap_timeout,
            encoding=encoding,
        )
        try:
            session.request_full_refresh()
        except BaseException:
            session.close()
            raise
        handle.add_metadata("pid", process.pid)
        handle.add_metadata("lines", session.view.line_count())

    telemetry.record_event(
        "plugin.spawn",
        level="debug",
        data={"command": command, "target": target, "pid": process.pid},
    )
    return session


__all__ = [
    "PluginSession",
    "LineSink",
    "REFRESH",
    "PASSTHROUGH",
    "generate_sentinel",
    "spawn",
]
