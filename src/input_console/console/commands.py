import logging
from typing import Callable, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

CommandHandler = Callable[[List[str]], None]
UnknownCommandHandler = Callable[[str], bool]


class Writer(Protocol):
    def __call__(self, fmt: str, *args: object) -> None: ...


def split_command(line: str) -> List[str]:
    """Split a committed line on single spaces, keeping empty tokens."""
    return line.split(" ")


class CommandRegistry:
    """Maps command names to handlers and dispatches committed input lines.

    Results (failures, unknown commands) are reported through ``writer`` so
    they show up above the prompt like any other output line.
    """

    def __init__(self, writer: Writer) -> None:
        self._writer = writer
        self._commands: Dict[str, CommandHandler] = {}
        self._unknown_handler: Optional[UnknownCommandHandler] = None

    def register(self, name: str, handler: CommandHandler) -> None:
        """Register ``handler`` under ``name``; a later registration wins."""
        self._commands[name] = handler

    def set_unknown_handler(self, handler: Optional[UnknownCommandHandler]) -> None:
        self._unknown_handler = handler

    def names(self) -> List[str]:
        return list(self._commands)

    def get(self, name: str) -> Optional[CommandHandler]:
        return self._commands.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def dispatch(self, line: str) -> None:
        """Run the command named by the first token of ``line``."""
        name, *args = split_command(line)
        handler = self._commands.get(name)
        if handler is not None:
            try:
                handler(args)
            except Exception as e:
                logger.exception("Command %r failed", name)
                self._writer("Failed to run command '%s': %s", name, e)
            return

        if self._unknown_handler is not None and self._unknown_handler(line):
            logger.debug("Unknown-command handler accepted %r", line)
            return

        self._writer("Unknown command: %s", line)
