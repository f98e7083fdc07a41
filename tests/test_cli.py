import io
import threading
from pathlib import Path
from typing import List

import pytest
from conftest import FakeKeySource, chars, key
from typer.testing import CliRunner

from input_console.cli import create_app
from input_console.console import Console, ConsoleState, NamedKey
from input_console.runtime_config import LogLevel, RuntimeConfig

CTRL_C = key(NamedKey.ctrl_c)


class ConsoleRecorder:
    """Console factory that keeps what it built for inspection."""

    def __init__(self, source: FakeKeySource) -> None:
        self.source = source
        self.output = io.StringIO()
        self.consoles: List[Console] = []
        self.configs: List[RuntimeConfig] = []

    def __call__(self, config: RuntimeConfig) -> Console:
        console = Console(self.source, output=self.output)
        self.configs.append(config)
        self.consoles.append(console)
        return console


def test_cli_runs_console_until_ctrl_c(tmp_path: Path) -> None:
    recorder = ConsoleRecorder(FakeKeySource([CTRL_C]))
    app = create_app(recorder)
    result = CliRunner().invoke(
        app, ["--prompt", "$ ", "--log-file", str(tmp_path / "cli.log")]
    )

    assert result.exit_code == 0, result.output
    assert len(recorder.consoles) == 1
    console = recorder.consoles[0]
    assert console.state is ConsoleState.terminated
    assert console.prompt == "$ "
    assert {"help", "echo"}.issubset(set(console.commands.names()))
    assert recorder.source.close_calls == 1


def test_cli_uses_environment_defaults(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("INPUT_CONSOLE_PROMPT", "env> ")
    monkeypatch.setenv("INPUT_CONSOLE_LOG_LEVEL", "debug")
    monkeypatch.setenv("INPUT_CONSOLE_LOG_FILE", str(tmp_path / "env.log"))
    recorder = ConsoleRecorder(FakeKeySource([CTRL_C]))
    result = CliRunner().invoke(create_app(recorder), [])

    assert result.exit_code == 0, result.output
    cfg = recorder.configs[0]
    assert cfg.prompt == "env> "
    assert cfg.log_level == LogLevel.debug
    assert cfg.log_file == tmp_path / "env.log"
    assert recorder.consoles[0].prompt == "env> "


def test_cli_exits_nonzero_when_terminal_unavailable(tmp_path: Path) -> None:
    recorder = ConsoleRecorder(FakeKeySource(fail_open=True))
    result = CliRunner().invoke(
        create_app(recorder), ["--log-file", str(tmp_path / "cli.log")]
    )

    assert result.exit_code == 1
    assert "Error: no terminal" in result.output


def test_cli_exits_nonzero_when_session_fails(tmp_path: Path) -> None:
    source = FakeKeySource(chars("boom") + [key(NamedKey.enter)])
    recorder = ConsoleRecorder(source)

    def make_console(config: RuntimeConfig) -> Console:
        console = recorder(config)
        console.set_unknown_command_handler(_failing_fallback)
        return console

    result = CliRunner().invoke(
        create_app(make_console), ["--log-file", str(tmp_path / "cli.log")]
    )

    assert result.exit_code == 1
    assert "Error: input session failed: kaput" in result.output


def _failing_fallback(line: str) -> bool:
    raise ValueError("kaput")


def test_cli_ticker_writes_above_prompt(tmp_path: Path) -> None:
    source = FakeKeySource()
    recorder = ConsoleRecorder(source)
    timer = threading.Timer(0.3, source.feed, args=([CTRL_C],))
    timer.start()
    try:
        result = CliRunner().invoke(
            create_app(recorder),
            ["--tick", "0.02", "--log-file", str(tmp_path / "cli.log")],
        )
    finally:
        timer.cancel()

    assert result.exit_code == 0, result.output
    assert "tick 1\n" in recorder.output.getvalue()


def test_cli_rejects_non_positive_tick(tmp_path: Path) -> None:
    recorder = ConsoleRecorder(FakeKeySource([CTRL_C]))
    result = CliRunner().invoke(create_app(recorder), ["--tick", "0"])
    assert result.exit_code != 0
    assert recorder.consoles == []
