import logging
import threading
from pathlib import Path
from typing import Callable, Optional

import typer
from typing_extensions import Annotated

from input_console.console import Console, DriverError, TerminalKeySource
from input_console.console.builtin_commands import register_builtin_commands
from input_console.logger import setup_logging
from input_console.runtime_config import (
    LOG_FILE_ENV,
    LOG_LEVEL_ENV,
    PROMPT_ENV,
    LogLevel,
    RuntimeConfig,
    load_envs,
)

logger = logging.getLogger(__name__)


def default_console_factory(config: RuntimeConfig) -> Console:
    """Default factory for creating Console instances."""
    return Console(TerminalKeySource())


def start_ticker(
    console: Console, interval: float, stop: threading.Event
) -> threading.Thread:
    """Write a numbered line every ``interval`` seconds until ``stop`` is set."""

    def tick() -> None:
        count = 0
        while not stop.wait(interval):
            count += 1
            console.write("tick %d", count)

    thread = threading.Thread(target=tick, name="input-console-ticker", daemon=True)
    thread.start()
    return thread


def create_app(
    console_factory: Optional[Callable[[RuntimeConfig], Console]] = None,
) -> typer.Typer:
    """
    Create and configure the Typer application.

    Args:
        console_factory: Factory function to create Console instances

    Returns:
        Typer application
    """
    # Load settings from .env if not already set in the environment
    load_envs()

    app = typer.Typer(rich_markup_mode=None)

    @app.command()
    def main(
        prompt: Annotated[
            str,
            typer.Option(
                "--prompt", envvar=PROMPT_ENV, help="Prompt shown before the input line"
            ),
        ] = "> ",
        log_level: Annotated[
            LogLevel,
            typer.Option(
                "--log-level",
                envvar=LOG_LEVEL_ENV,
                case_sensitive=False,
                help="Log file threshold",
            ),
        ] = LogLevel.warning,
        log_file: Annotated[
            Optional[Path],
            typer.Option("--log-file", envvar=LOG_FILE_ENV, help="Log file path"),
        ] = None,
        tick: Annotated[
            Optional[float],
            typer.Option(
                "--tick",
                min=0.01,
                help="Write a line every N seconds to show output above the prompt",
            ),
        ] = None,
    ) -> None:
        """INPUT CONSOLE - type commands while output keeps scrolling above the prompt"""
        cfg = RuntimeConfig(
            prompt=prompt,
            log_level=log_level,
            log_file=log_file,
            tick_interval=tick,
        )
        setup_logging(cfg.log_level.value, cfg.resolved_log_file)
        logger.info("Starting input console with prompt %r", cfg.prompt)

        factory = console_factory or default_console_factory
        console = factory(cfg)
        register_builtin_commands(console)

        stop = threading.Event()
        if cfg.tick_interval:
            start_ticker(console, cfg.tick_interval, stop)

        try:
            console.run(cfg.prompt)
        except DriverError as e:
            typer.echo(f"\nError: {e}", err=True)
            raise typer.Exit(code=1)
        except Exception as e:
            typer.echo(f"\nError: input session failed: {e}", err=True)
            raise typer.Exit(code=1)
        finally:
            stop.set()

        typer.echo("")

    return app


# Create default app instance for the console script entry point
app = create_app()


if __name__ == "__main__":
    app()
