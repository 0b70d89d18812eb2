"""Executable entry point for the line-oriented editor."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence, TextIO

from xd.buffer import TEXT_ERRORS
from xd.commands import Session
from xd.config import EditorConfig

from .controller import StdioEditor


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xd", description="Minimal line-addressed text editor."
    )
    parser.add_argument("file", nargs="?", help="File whose lines seed the buffer")
    parser.add_argument(
        "--rc",
        type=Path,
        default=None,
        help="Command file replayed before interactive input (default: ~/.xdrc)",
    )
    parser.add_argument(
        "--no-rc",
        action="store_true",
        help="Skip the startup command file",
    )
    parser.add_argument(
        "--plugin-timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Abandon a plugin response after this long (default: wait forever)",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EditorConfig:
    config = EditorConfig.from_env()
    if args.no_rc:
        config = replace(config, rc_path=None)
    elif args.rc is not None:
        config = replace(config, rc_path=args.rc)
    if args.plugin_timeout is not None:
        if args.plugin_timeout <= 0:
            raise SystemExit("xd: --plugin-timeout must be positive")
        config = replace(config, plugin_timeout=args.plugin_timeout)
    return config


def _byte_preserving(stream: TextIO, encoding: str) -> TextIO:
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(encoding=encoding, errors=TEXT_ERRORS)
    return stream


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    args = _parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as exc:
        raise SystemExit(f"xd: {exc}") from exc

    source = stdin or _byte_preserving(sys.stdin, config.encoding)
    session = Session(
        config=config,
        output=stdout or _byte_preserving(sys.stdout, config.encoding),
        errors=stderr or sys.stderr,
    )
    with StdioEditor(session) as editor:
        if args.file is not None:
            editor.load_initial(args.file)
        editor.replay_rc(config.rc_path)
        try:
            editor.run(source)
        except OSError as exc:
            session.warn(f"read error: {exc}")
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
