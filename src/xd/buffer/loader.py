"""Plain-text file loading into a fresh LineStore."""

from __future__ import annotations

import os

from xd.errors import FileOpenError
from xd.runtime import telemetry

from .store import TEXT_ERRORS, LineStore


def load_file(path: str | os.PathLike[str], *, encoding: str = "utf-8") -> LineStore:
    """Read ``path`` into a new store, one entry per line, newline stripped.

    Raises ``FileOpenError`` when the file cannot be opened or read.
    """

    name = os.fspath(path)
    store = LineStore(encoding=encoding)
    with telemetry.span(
        "buffer::load_file", component="buffer", metadata={"path": name}
    ) as handle:
        try:
            with open(name, encoding=encoding, errors=TEXT_ERRORS, newline="") as fp:
                for line in fp:
                    store.append(line[:-1] if line.endswith("\n") else line)
        except OSError as exc:
            handle.add_metadata("error", exc.strerror or str(exc))
            raise FileOpenError(name, exc.strerror or str(exc)) from exc
        handle.add_metadata("lines", store.line_count())
    telemetry.record_event(
        "file.load",
        level="debug",
        data={"path": name, "lines": store.line_count(), "bytes": store.byte_count()},
    )
    return store


__all__ = ["load_file"]
