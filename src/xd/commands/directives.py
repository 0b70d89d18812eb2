"""Parser for the ``plugin <command-template> <trigger-pattern>`` directive."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern

from xd.errors import DirectiveError, PatternCompileError

PLUGIN_KEYWORD = "plugin"


@dataclass(frozen=True, slots=True)
class PluginConfig:
    """Which command to spawn, and for which ``e`` targets."""

    template: str
    trigger: Pattern[str]

    def matches(self, target: str) -> bool:
        return self.trigger.search(target) is not None


def is_plugin_directive(line: str) -> bool:
    tokens = line.split(maxsplit=1)
    return bool(tokens) and tokens[0] == PLUGIN_KEYWORD


def parse_plugin_directive(line: str) -> PluginConfig:
    tokens = line.split()
    if not tokens or tokens[0] != PLUGIN_KEYWORD:
        raise DirectiveError()
    args = tokens[1:]
    if len(args) != 2:
        raise DirectiveError(
            f"plugin directive takes a command and a pattern, got {len(args)} argument(s)"
        )
    template, pattern = args
    try:
        trigger = re.compile(pattern)
    except re.error as exc:
        raise PatternCompileError(str(exc), pattern=pattern) from exc
    return PluginConfig(template=template, trigger=trigger)


__all__ = [
    "PLUGIN_KEYWORD",
    "PluginConfig",
    "is_plugin_directive",
    "parse_plugin_directive",
]
