"""Plugin double speaking the sentinel protocol: ``fake_plugin.py -p SENTINEL TARGET``.

Targets with special behaviour:

``hangup``  -- write one line and exit without a sentinel
``mute``    -- never answer, wait for stdin to close
``split``   -- deliver the initial sentinel across two writes
"""

from __future__ import annotations

import sys
import time


def respond(out, lines, sentinel: str) -> None:
    for line in lines:
        out.write(line.encode("utf-8") + b"\n")
    out.write(sentinel.encode("ascii"))
    out.flush()


def main(argv: list[str]) -> int:
    if len(argv) != 3 or argv[0] != "-p":
        sys.stderr.write("usage: fake_plugin.py -p SENTINEL TARGET\n")
        return 2
    sentinel, target = argv[1], argv[2]
    out = sys.stdout.buffer

    if target == "hangup":
        out.write(b"one\n")
        out.flush()
        return 0
    if target == "mute":
        sys.stdin.buffer.read()
        return 0
    if target == "split":
        out.write(b"one\ntwo\n" + sentinel[:3].encode("ascii"))
        out.flush()
        time.sleep(0.05)
        out.write(sentinel[3:].encode("ascii"))
        out.flush()
    else:
        respond(out, ["one", "two"], sentinel)

    while True:
        raw = sys.stdin.buffer.readline()
        if not raw:
            return 0
        kind, _, address = raw.decode("utf-8").strip().partition(" ")
        if kind == "x":
            respond(out, [f"{target}:{address}:{n}" for n in (1, 2, 3)], sentinel)
        elif kind == "l":
            respond(out, [f"reply {address}"], sentinel)
        else:
            respond(out, [], sentinel)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
