"""
prompt_toolkit-backed key source for POSIX terminals.

prompt_toolkit puts the terminal in raw mode and parses VT100 input into
KeyPress objects; this module blocks until input is available and maps each
KeyPress onto the console's KeyEvent vocabulary.
"""

import logging
import select
import sys
from collections import deque
from contextlib import ExitStack
from typing import Deque, Dict, List, Optional, TextIO

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from input_console.console.keys import DriverError, KeyEvent, NamedKey

logger = logging.getLogger(__name__)

_NAMED_KEYS: Dict[Keys, NamedKey] = {
    Keys.ControlM: NamedKey.enter,
    Keys.ControlJ: NamedKey.enter,
    Keys.ControlC: NamedKey.ctrl_c,
    Keys.Up: NamedKey.arrow_up,
    Keys.Down: NamedKey.arrow_down,
    Keys.Left: NamedKey.arrow_left,
    Keys.Right: NamedKey.arrow_right,
}


def _char_event(ch: str) -> Optional[KeyEvent]:
    if ch == " ":
        return KeyEvent.of_key(NamedKey.space)
    if ch in ("\r", "\n"):
        return None
    return KeyEvent.of_char(ch)


def translate_key_press(press: KeyPress) -> List[KeyEvent]:
    """Map a prompt_toolkit KeyPress onto zero or more key events."""
    key = press.key
    if not isinstance(key, Keys):
        event = _char_event(key)
        return [event] if event else []

    if key == Keys.ControlH:
        # prompt_toolkit reports both BS and DEL as ControlH.
        if press.data == "\x7f":
            return [KeyEvent.of_key(NamedKey.backspace2)]
        return [KeyEvent.of_key(NamedKey.backspace)]

    if key == Keys.BracketedPaste:
        return [event for event in map(_char_event, press.data) if event]

    named = _NAMED_KEYS.get(key)
    if named is not None:
        return [KeyEvent.of_key(named)]

    # Other keys (Tab, Escape, function keys...) carry no character.
    return [KeyEvent()]


class TerminalKeySource:
    """Reads keys from the controlling terminal in raw mode."""

    def __init__(self, stdin: Optional[TextIO] = None) -> None:
        self._stdin = stdin
        self._input: Optional[Input] = None
        self._stack: Optional[ExitStack] = None
        self._pending: Deque[KeyEvent] = deque()

    def open(self) -> None:
        stack = ExitStack()
        try:
            self._input = create_input(
                self._stdin or sys.stdin, always_prefer_tty=True
            )
            stack.enter_context(self._input.raw_mode())
        except (OSError, ValueError) as e:
            stack.close()
            raise DriverError(f"Unable to open terminal: {e}") from e
        self._stack = stack
        logger.debug("Terminal opened in raw mode")

    def next_key(self) -> KeyEvent:
        if self._input is None:
            raise DriverError("Terminal is not open")
        while not self._pending:
            self._pending.extend(self._read_events(self._input))
        return self._pending.popleft()

    def _read_events(self, inp: Input) -> List[KeyEvent]:
        try:
            select.select([inp.fileno()], [], [])
            presses = inp.read_keys() or inp.flush_keys()
        except OSError as e:
            raise DriverError(f"Unable to read from terminal: {e}") from e
        if not presses and inp.closed:
            raise DriverError("Terminal input was closed")
        events: List[KeyEvent] = []
        for press in presses:
            events.extend(translate_key_press(press))
        return events

    def close(self) -> None:
        if self._stack is not None:
            self._stack.close()
            self._stack = None
        if self._input is not None:
            self._input.close()
            self._input = None
        self._pending.clear()
        logger.debug("Terminal closed")
