"""
Console subpackage: read loop, line buffer, rendering, commands, and key sources.
"""

from input_console.console.commands import CommandRegistry
from input_console.console.console import DEFAULT_PROMPT, Console, ConsoleState
from input_console.console.keys import DriverError, KeyEvent, KeySource, NamedKey
from input_console.console.line_buffer import LineBuffer
from input_console.console.terminal import TerminalKeySource

__all__ = [
    "CommandRegistry",
    "Console",
    "ConsoleState",
    "DEFAULT_PROMPT",
    "DriverError",
    "KeyEvent",
    "KeySource",
    "LineBuffer",
    "NamedKey",
    "TerminalKeySource",
]
