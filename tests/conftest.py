import io
import threading
from collections import deque
from typing import Deque, Iterable, List

import pytest

from input_console.console.keys import DriverError, KeyEvent, NamedKey


def chars(text: str) -> List[KeyEvent]:
    """Key events for typing ``text``, with spaces reported as named keys."""
    return [
        KeyEvent.of_key(NamedKey.space) if ch == " " else KeyEvent.of_char(ch)
        for ch in text
    ]


def key(named: NamedKey) -> KeyEvent:
    return KeyEvent.of_key(named)


class FakeKeySource:
    """Scripted key source for testing.

    Tests can feed more keys while the console is listening and wait until the
    read loop has drained them. ``next_key`` raises DriverError if nothing
    arrives in time so a broken test fails instead of hanging.
    """

    def __init__(
        self,
        events: Iterable[KeyEvent] = (),
        fail_open: bool = False,
        timeout: float = 5.0,
    ) -> None:
        self._cond = threading.Condition()
        self._events: Deque[KeyEvent] = deque(events)
        self._blocked = False
        self._timeout = timeout
        self.fail_open = fail_open
        self.open_calls = 0
        self.close_calls = 0
        self.read_calls = 0
        self.consumed: List[KeyEvent] = []

    def feed(self, events: Iterable[KeyEvent]) -> None:
        with self._cond:
            self._events.extend(events)
            self._cond.notify_all()

    def open(self) -> None:
        self.open_calls += 1
        if self.fail_open:
            raise DriverError("no terminal")

    def next_key(self) -> KeyEvent:
        with self._cond:
            self.read_calls += 1
            self._blocked = True
            self._cond.notify_all()
            if not self._cond.wait_for(lambda: self._events, self._timeout):
                self._blocked = False
                raise DriverError("no key within timeout")
            self._blocked = False
            event = self._events.popleft()
            self.consumed.append(event)
            return event

    def close(self) -> None:
        self.close_calls += 1

    def wait_idle(self, timeout: float = 5.0) -> None:
        """Wait until every fed key was read and the reader is blocked again."""
        with self._cond:
            drained = self._cond.wait_for(
                lambda: not self._events and self._blocked, timeout
            )
        assert drained, "read loop did not drain the key queue"


class RecordingOutput(io.StringIO):
    """StringIO that counts flushes, standing in for the terminal."""

    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def key_source() -> FakeKeySource:
    return FakeKeySource()


@pytest.fixture(autouse=True)
def isolate_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    # Keep log files out of the real home directory
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path_factory.mktemp("data")))
