from __future__ import annotations

import io
from pathlib import Path
from typing import Iterator

import pytest

from conftest import make_session, output_of
from xd.adapters.stdio import StdioEditor
from xd.adapters.stdio.app import _byte_preserving, main
from xd.config import EditorConfig
from xd.errors import InvalidCommand


def run_main(argv: list[str], commands: str) -> tuple[int, str, str]:
    stdout, stderr = io.StringIO(), io.StringIO()
    code = main(argv, stdin=io.StringIO(commands), stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_round_trip_prints_every_line(tmp_path: Path) -> None:
    lines = ["first", "", "  indented", "last line"]
    path = tmp_path / "doc.txt"
    path.write_text("\n".join(lines) + "\n")

    code, out, _ = run_main([str(path), "--no-rc"], "1,$p\n")

    assert code == 0
    byte_count, *printed = out.splitlines()
    assert int(byte_count) == path.stat().st_size
    assert printed == lines


def test_round_trip_preserves_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9\nplain\n")

    code, out, _ = run_main([str(path), "--no-rc"], "1,$p\n")

    assert code == 0
    byte_count, *printed = out.splitlines()
    assert int(byte_count) == path.stat().st_size == 11
    assert "\n".join(printed).encode("utf-8", "surrogateescape") == b"caf\xe9\nplain"


def test_default_streams_write_original_bytes() -> None:
    raw = io.BytesIO()
    stream = _byte_preserving(io.TextIOWrapper(raw, encoding="utf-8"), "utf-8")

    stream.write("caf\udce9\n")
    stream.flush()

    assert raw.getvalue() == b"caf\xe9\n"


def test_scenario_session(tmp_path: Path) -> None:
    path = tmp_path / "greek.txt"
    path.write_text("alpha\nbeta\ngamma\n")

    code, out, _ = run_main([str(path), "--no-rc"], "2p\n$\n3pn\n3px\nh\n")

    assert code == 0
    assert out.splitlines() == [
        "17",
        "beta",
        "gamma",
        "3\tgamma",
        "?",
        "invalid command suffix",
    ]


def test_missing_startup_file_warns(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"

    code, out, err = run_main([str(missing), "--no-rc"], "h\n")

    assert code == 0
    assert out.splitlines()[0] == "0"
    assert str(missing) in out.splitlines()[1]
    assert str(missing) in err


def test_rc_file_runs_before_input(tmp_path: Path) -> None:
    doc = tmp_path / "doc.txt"
    doc.write_text("one\ntwo\n")
    rc = tmp_path / "xdrc"
    rc.write_text("2p\n")

    code, out, _ = run_main([str(doc), "--rc", str(rc)], "1p\n")

    assert code == 0
    assert out.splitlines() == ["8", "two", "one"]


def test_missing_rc_file_is_ignored(tmp_path: Path) -> None:
    code, out, err = run_main(["--rc", str(tmp_path / "absent")], "h\n")

    assert code == 0
    assert out == "no error\n"
    assert err == ""


def test_rc_file_with_undecodable_bytes_still_runs(tmp_path: Path) -> None:
    rc = tmp_path / "xdrc"
    rc.write_bytes(b"plugin viewer caf\xe9\nh\n")

    code, out, err = run_main(["--rc", str(rc)], "h\n")

    assert code == 0
    assert out == "no error\nno error\n"
    assert err == ""


def test_rc_defaults_to_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".xdrc").write_text("h\n")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("XD_RC", raising=False)

    code, out, _ = run_main([], "")

    assert code == 0
    assert out == "no error\n"


class FailingInput:
    def __iter__(self) -> Iterator[str]:
        yield "h\n"
        raise OSError("input vanished")


def test_input_read_failure_exits_nonzero() -> None:
    stdout, stderr = io.StringIO(), io.StringIO()

    code = main(["--no-rc"], stdin=FailingInput(), stdout=stdout, stderr=stderr)

    assert code == 1
    assert stdout.getvalue() == "no error\n"
    assert "input vanished" in stderr.getvalue()


def test_plugin_timeout_flag_must_be_positive() -> None:
    with pytest.raises(SystemExit):
        run_main(["--no-rc", "--plugin-timeout", "0"], "")


def test_editor_replays_lines_through_interpreter() -> None:
    session = make_session(["a", "b"])
    with StdioEditor(session) as editor:
        count = editor.run(iter(["2p\n", "zz\n"]))

    assert count == 2
    assert output_of(session) == "b\n?\n"
    assert isinstance(session.last_error, InvalidCommand)


def test_config_from_env(tmp_path: Path) -> None:
    config = EditorConfig.from_env(
        {"HOME": str(tmp_path), "XD_PLUGIN_TIMEOUT": "2.5", "XD_ENCODING": "latin-1"}
    )

    assert config.rc_path == tmp_path / ".xdrc"
    assert config.plugin_timeout == 2.5
    assert config.reap_timeout == 1.0
    assert config.encoding == "latin-1"


def test_config_rc_override_and_no_home(tmp_path: Path) -> None:
    assert EditorConfig.from_env({}).rc_path is None
    config = EditorConfig.from_env({"XD_RC": str(tmp_path / "rc")})
    assert config.rc_path == tmp_path / "rc"


def test_config_rejects_bad_timeout() -> None:
    with pytest.raises(ValueError):
        EditorConfig.from_env({"XD_PLUGIN_TIMEOUT": "soon"})
    with pytest.raises(ValueError):
        EditorConfig.from_env({"XD_PLUGIN_TIMEOUT": "-1"})
