"""
ANSI rendering of the prompt line.

Everything here is a pure function of its arguments: the console decides
when to call it and serializes the resulting writes.
"""

from typing import Iterable, List

CLEAR_TO_EOL = "\033[K"
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"
CURSOR_FORWARD = "\033[C"
BACKSPACE = "\b"
CARRIAGE_RETURN = "\r"

# Emitted when a character is erased, ahead of the full redraw.
ERASE_LAST_CHAR = BACKSPACE + CLEAR_TO_EOL


def tokenize(text: str) -> List[str]:
    """Split on single spaces and drop empty tokens."""
    return [token for token in text.split(" ") if token]


def colorize(text: str, command_names: Iterable[str]) -> str:
    """Color the first token green if it is a known command, red otherwise."""
    tokens = tokenize(text)
    if not tokens:
        return text

    head, rest = tokens[0], tokens[1:]
    color = GREEN if head in set(command_names) else RED
    separator = " " if rest else ""
    rendered = f"{color}{head}{RESET}{separator}{' '.join(rest)}"

    # The tokenizer drops a trailing space the user can still see.
    if text.endswith(" "):
        rendered += " "
    return rendered


def render_input_line(prefix: str, text: str, command_names: Iterable[str]) -> str:
    """Return ``prefix`` followed by the colorized input text."""
    return f"{prefix}{colorize(text, command_names)}"


def redraw_prefix(prompt: str) -> str:
    """Prefix that wipes the current line and reprints the prompt."""
    return f"{CARRIAGE_RETURN}{CLEAR_TO_EOL}{prompt}"


def output_line_prefix(message: str, prompt: str) -> str:
    """Prefix that replaces the prompt line with ``message`` and reprints the
    prompt on the line below it."""
    line = message.rstrip("\n")
    return f"{CARRIAGE_RETURN}{CLEAR_TO_EOL}{line}\n{CARRIAGE_RETURN}{prompt}"
