"""
Key events and the key-source contract consumed by the console read loop.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class NamedKey(str, Enum):
    """Non-printable keys the read loop reacts to."""

    enter = "enter"
    backspace = "backspace"
    backspace2 = "backspace2"
    arrow_up = "arrow-up"
    arrow_down = "arrow-down"
    arrow_left = "arrow-left"
    arrow_right = "arrow-right"
    space = "space"
    ctrl_c = "ctrl-c"


ARROW_KEYS = frozenset(
    {
        NamedKey.arrow_up,
        NamedKey.arrow_down,
        NamedKey.arrow_left,
        NamedKey.arrow_right,
    }
)

BACKSPACE_KEYS = frozenset({NamedKey.backspace, NamedKey.backspace2})

# Character carried by named-key events.
NO_CHAR = ""


@dataclass(frozen=True)
class KeyEvent:
    """A single decoded key press: a printable character or a named key."""

    char: str = NO_CHAR
    key: Optional[NamedKey] = None

    @classmethod
    def of_char(cls, char: str) -> "KeyEvent":
        return cls(char=char)

    @classmethod
    def of_key(cls, key: NamedKey) -> "KeyEvent":
        return cls(key=key)


class DriverError(Exception):
    """Raised when the key source cannot be opened or read from."""


class KeySource(Protocol):
    """Blocking stream of key events backed by a raw-mode terminal."""

    def open(self) -> None:
        """Acquire the terminal. Raises DriverError on failure."""
        ...

    def next_key(self) -> KeyEvent:
        """Block until the next key event. Raises DriverError on failure."""
        ...

    def close(self) -> None:
        """Release the terminal. Safe to call when open() failed."""
        ...
