from __future__ import annotations

import io
import os
import stat
import sys
from pathlib import Path
from typing import Iterable

import pytest

os.environ.setdefault("XD_LOG_LEVEL", "WARNING")
os.environ.setdefault("XD_LOG_CONSOLE", "0")

from xd.buffer import LineStore  # noqa: E402
from xd.commands import Session  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"


def make_session(lines: Iterable[str] = (), *, dot: int = 1) -> Session:
    session = Session(
        store=LineStore.from_lines(lines),
        output=io.StringIO(),
        errors=io.StringIO(),
    )
    session.address.dot = dot
    return session


def output_of(session: Session) -> str:
    assert isinstance(session.output, io.StringIO)
    return session.output.getvalue()


@pytest.fixture
def plugin_command(tmp_path: Path) -> str:
    """Executable wrapper that runs the fake plugin under this interpreter."""

    if sys.platform.startswith("win"):
        pytest.skip("plugin protocol relies on POSIX pipes")
    script = tmp_path / "fake-plugin"
    script.write_text(
        "#!/bin/sh\n"
        f'exec "{sys.executable}" "{FIXTURES / "fake_plugin.py"}" "$@"\n'
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)
