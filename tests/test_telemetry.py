from __future__ import annotations

from typing import Iterator

import pytest

from xd.runtime import telemetry


@pytest.fixture(autouse=True)
def restore_default_config() -> Iterator[None]:
    yield
    telemetry.configure()


def test_unknown_preset_is_rejected_when_explicit() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_unknown_preset_from_env_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    events: list[tuple[str, str, object]] = []
    monkeypatch.setenv("XD_LOG_PRESET", "verbose")
    monkeypatch.setattr(
        telemetry,
        "record_event",
        lambda name, *, level="info", data=None, logger_name=None: events.append(
            (name, level, data)
        ),
    )

    telemetry.configure_from_env()

    assert telemetry.get_logger() is not None
    assert events == [("telemetry.unknown_preset", "warning", {"preset": "verbose"})]


def test_development_preset_is_accepted() -> None:
    telemetry.configure(preset="development")

    assert telemetry.get_logger("xd.test") is telemetry.get_logger("xd.test")


def test_span_reraises_after_logging() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span("test::span", component="test", metadata={"k": 1}) as h:
            h.add_metadata("stage", "inside")
            raise RuntimeError("boom")
