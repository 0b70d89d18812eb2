"""Command parsing, dispatch, and session state."""

from .base import CommandResult, Session, SessionBus
from .directives import PluginConfig, is_plugin_directive, parse_plugin_directive
from .flags import PrintFlag, read_flags
from .handlers import edit_target, print_lines, show_last_error
from .interpreter import FAILURE_INDICATOR, CommandInterpreter

__all__ = [
    "CommandInterpreter",
    "CommandResult",
    "FAILURE_INDICATOR",
    "PluginConfig",
    "PrintFlag",
    "Session",
    "SessionBus",
    "edit_target",
    "is_plugin_directive",
    "parse_plugin_directive",
    "print_lines",
    "read_flags",
    "show_last_error",
]
