import logging
import sys
import threading
from enum import Enum
from typing import Optional, TextIO

from input_console.console.commands import (
    CommandHandler,
    CommandRegistry,
    UnknownCommandHandler,
)
from input_console.console.keys import (
    ARROW_KEYS,
    BACKSPACE_KEYS,
    NO_CHAR,
    DriverError,
    KeyEvent,
    KeySource,
    NamedKey,
)
from input_console.console.line_buffer import LineBuffer
from input_console.console.rendering import (
    CURSOR_FORWARD,
    ERASE_LAST_CHAR,
    output_line_prefix,
    redraw_prefix,
    render_input_line,
)

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "> "


class ConsoleState(str, Enum):
    """Lifecycle of a console session."""

    idle = "idle"
    listening = "listening"
    terminated = "terminated"


class Console:
    """
    Terminal console that keeps output lines separate from the line being typed.

    Output written with ``write`` is printed above the prompt, which is then
    reprinted together with whatever the user had typed so far. Input is read
    one key at a time on a background thread started by ``listen``; each
    committed line is dispatched to the registered commands.

    The reader thread is the only mutator of the input buffer. Every write to
    the terminal, from any thread, goes through ``_output_lock``.
    """

    def __init__(self, key_source: KeySource, output: Optional[TextIO] = None) -> None:
        self._keys = key_source
        self._output = output if output is not None else sys.stdout
        self._buffer = LineBuffer()
        self._commands = CommandRegistry(self.write)
        self._prompt = DEFAULT_PROMPT
        self._state = ConsoleState.idle
        self._output_lock = threading.Lock()
        self._terminated = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._state_lock = threading.Lock()
        self._error: Optional[BaseException] = None

    @property
    def state(self) -> ConsoleState:
        return self._state

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def buffer_text(self) -> str:
        return self._buffer.text

    @property
    def commands(self) -> CommandRegistry:
        return self._commands

    def register_command(self, name: str, handler: CommandHandler) -> None:
        """Register a command; the handler receives the arguments after the name."""
        self._commands.register(name, handler)

    def set_unknown_command_handler(
        self, handler: Optional[UnknownCommandHandler]
    ) -> None:
        """Install a fallback called with the full line for unknown commands.

        The handler returns True when it handled the line.
        """
        self._commands.set_unknown_handler(handler)

    def write(self, fmt: str, *args: object) -> None:
        """Print a formatted line above the prompt and redraw the input line."""
        message = fmt % args if args else fmt
        with self._output_lock:
            self._emit(self._render(output_line_prefix(message, self._prompt)))

    def listen(self, prompt: str = DEFAULT_PROMPT) -> None:
        """Start reading keys on a background thread and return immediately."""
        with self._state_lock:
            if self._state is not ConsoleState.idle:
                raise RuntimeError(f"Console cannot listen while {self._state.value}")
            self._prompt = prompt
            self._state = ConsoleState.listening
        self._thread = threading.Thread(
            target=self._run, name="input-console-reader", daemon=True
        )
        self._thread.start()
        logger.info("Listening for input with prompt %r", prompt)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the session ends.

        Returns False if ``timeout`` elapsed first. Re-raises the error that
        ended the session, if any (a DriverError or a failure outside the
        command handler boundary).
        """
        if self._state is ConsoleState.idle:
            raise RuntimeError("Console is not listening")
        if not self._terminated.wait(timeout):
            return False
        if self._error is not None:
            raise self._error
        return True

    def run(self, prompt: str = DEFAULT_PROMPT) -> None:
        """Listen and block until the user presses Ctrl-C."""
        self.listen(prompt)
        self.wait()

    def _run(self) -> None:
        try:
            with self._output_lock:
                self._emit(self._prompt)
            try:
                self._keys.open()
                self._read_loop()
            finally:
                self._keys.close()
        except DriverError as e:
            logger.critical("Key source failed, ending session: %s", e)
            self._error = e
        except Exception as e:
            logger.exception("Input session failed")
            self._error = e
        finally:
            self._state = ConsoleState.terminated
            self._terminated.set()
            logger.info("Input session terminated")

    def _read_loop(self) -> None:
        while True:
            event = self._keys.next_key()
            self._apply_key(event)

            if event.key is NamedKey.ctrl_c:
                return
            if event.key is NamedKey.enter:
                self._commit()

    def _apply_key(self, event: KeyEvent) -> None:
        effect = ""
        if event.key in BACKSPACE_KEYS:
            if self._buffer.backspace():
                effect = ERASE_LAST_CHAR
        elif event.key in ARROW_KEYS:
            # Cosmetic only; the logical cursor stays at the end of the line.
            effect = CURSOR_FORWARD
        elif event.key is NamedKey.space:
            self._buffer.append_space()
        elif event.char != NO_CHAR:
            self._buffer.append(event.char)

        with self._output_lock:
            self._emit(effect + self._render(redraw_prefix(self._prompt)))

    def _commit(self) -> None:
        line = self._buffer.snapshot()
        self._buffer.clear()
        logger.debug("Dispatching line %r", line)
        self._commands.dispatch(line)

    def _render(self, prefix: str) -> str:
        return render_input_line(prefix, self._buffer.text, self._commands.names())

    def _emit(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()
