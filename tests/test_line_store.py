from __future__ import annotations

from pathlib import Path

import pytest

from xd.buffer import AddressState, LineStore, load_file
from xd.errors import FileOpenError


def test_append_tracks_lines_and_bytes() -> None:
    store = LineStore()
    store.append("alpha")
    store.append("beta")

    assert store.line_count() == 2
    assert store.byte_count() == len("alpha\nbeta\n")
    assert store.get(1) == "alpha"
    assert store.get(2) == "beta"
    assert list(store) == ["alpha", "beta"]


def test_byte_count_uses_encoded_length() -> None:
    store = LineStore.from_lines(["é"])

    assert store.byte_count() == 3


def test_destroy_releases_lines() -> None:
    store = LineStore.from_lines(["a", "b"])
    store.destroy()

    assert store.line_count() == 0
    assert store.byte_count() == 0


def test_load_file_strips_newlines(tmp_path: Path) -> None:
    path = tmp_path / "three.txt"
    path.write_text("alpha\nbeta\ngamma\n")

    store = load_file(path)

    assert store.snapshot() == ("alpha", "beta", "gamma")
    assert store.byte_count() == path.stat().st_size


def test_load_file_keeps_unterminated_last_line(tmp_path: Path) -> None:
    path = tmp_path / "tail.txt"
    path.write_text("one\ntwo")

    assert load_file(path).snapshot() == ("one", "two")


def test_load_missing_file_raises(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"

    with pytest.raises(FileOpenError) as excinfo:
        load_file(missing)

    assert excinfo.value.path == str(missing)
    assert str(missing) in str(excinfo.value)


def test_address_state_reset_and_clamp() -> None:
    state = AddressState(dot=7, begin=2, end=7)

    state.clamp(5)
    assert state.dot == 5

    state.reset(0)
    assert state.dot == 0

    state.reset(3)
    assert (state.dot, state.begin, state.end) == (1, 0, 0)


def test_load_file_keeps_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9\nplain\n")

    store = load_file(path)

    assert store.line_count() == 2
    assert store.byte_count() == path.stat().st_size
    assert store.get(1).encode("utf-8", "surrogateescape") == b"caf\xe9"
