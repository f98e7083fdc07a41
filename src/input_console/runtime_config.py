"""
Runtime configuration for the input console.

This module provides:
- load_envs(): load INPUT_CONSOLE_* settings from a .env file if they are not
  already present in the environment.
- RuntimeConfig: a dataclass holding runtime settings (prompt, logging, ticker).
- get_data_dir(): where log files live.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

# Environment variable names
PROMPT_ENV: str = "INPUT_CONSOLE_PROMPT"
LOG_LEVEL_ENV: str = "INPUT_CONSOLE_LOG_LEVEL"
LOG_FILE_ENV: str = "INPUT_CONSOLE_LOG_FILE"


def load_envs(env_file: Optional[str] = None) -> None:
    """
    Load INPUT_CONSOLE_PROMPT, INPUT_CONSOLE_LOG_LEVEL and INPUT_CONSOLE_LOG_FILE
    from a .env file into the process environment if they are not already set.
    """
    env_values = dotenv_values(env_file) if env_file else dotenv_values()
    for key in (PROMPT_ENV, LOG_LEVEL_ENV, LOG_FILE_ENV):
        if not os.environ.get(key):
            val = env_values.get(key)
            if val:
                os.environ[key] = str(val)


class LogLevel(str, Enum):
    """Supported log levels."""

    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"
    critical = "CRITICAL"


@dataclass(frozen=True)
class RuntimeConfig:
    """
    Holds runtime configuration for an interactive session.

    Attributes:
        prompt: Text shown in front of the input line.
        log_level: Threshold for the log file.
        log_file: Log file path; defaults to input_console.log in the data directory.
        tick_interval: If set, write a "tick" line every N seconds while the user types.
    """

    prompt: str = "> "
    log_level: LogLevel = LogLevel.warning
    log_file: Optional[Path] = None
    tick_interval: Optional[float] = None

    @property
    def resolved_log_file(self) -> Path:
        return self.log_file or get_data_dir() / "input_console.log"


def get_data_dir() -> Path:
    """
    Return the input console data directory under XDG_DATA_HOME or fallback to ~/.local/share.
    """
    data_home = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return data_home / "input_console"
