"""
Input line state edited by the console read loop.
"""

from input_console.console.keys import NO_CHAR


class LineBuffer:
    """Holds the characters typed since the last committed line.

    Only the read loop mutates the buffer; other threads read it through
    ``text`` when redrawing the prompt line.
    """

    def __init__(self) -> None:
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __bool__(self) -> bool:
        return bool(self._text)

    def append(self, ch: str) -> None:
        """Append a single typed character."""
        if ch == NO_CHAR:
            raise ValueError("cannot append the empty no-character value")
        self._text += ch

    def append_space(self) -> None:
        self.append(" ")

    def backspace(self) -> bool:
        """Remove the last character; returns False when the buffer was empty."""
        if not self._text:
            return False
        self._text = self._text[:-1]
        return True

    def clear(self) -> None:
        self._text = ""

    def snapshot(self) -> str:
        """Return the contents with any trailing CR/LF removed."""
        return self._text.rstrip("\r\n")
