"""Unit tests for the top-level CLI entry points.

These tests validate help output, version callback behavior, and the
signal traces printed by the ``simulate`` command.
"""

import pytest
import typer
from typer.testing import CliRunner

from dialog_lifecycle import cli
from dialog_lifecycle.validation.schemas import InvalidOptions


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from reconfiguring the root logger during tests."""
    monkeypatch.setattr(cli, "configure_logging", lambda **_kwargs: None)


def _labels(trace: list[str]) -> list[str]:
    return [line.split(" ", 1)[1] for line in trace]


def test_version_callback() -> None:
    """Ensure ``--version`` callback exits the process cleanly."""
    with pytest.raises(typer.Exit):
        cli.version_callback(True)


def test_version_callback_false__noop() -> None:
    cli.version_callback(False)


def test_main_help() -> None:
    """Invoking the app without args should print usage and exit 0."""
    runner = CliRunner()
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 0
    assert "Usage" in result.stdout


def test_simulate_close() -> None:
    """An explicit close is torn down after the short delay."""
    trace = cli.run_simulation(cli.Trigger.CLOSE, children=["files"])

    assert _labels(trace) == [
        "element:modal-open",
        "state:open",
        "element:modal-close",
        "bus:modal-close",
        "state:closing",
        "unmount files",
        "close-callback",
        "state:destroyed",
    ]
    assert trace[-1].startswith("t=0.300")


def test_simulate_form_success__waits_long_delay() -> None:
    trace = cli.run_simulation(cli.Trigger.FORM_SUCCESS)

    assert _labels(trace) == [
        "element:modal-open",
        "state:open",
        "bus:modal-close-soon",
        "state:open",
        "element:modal-close",
        "bus:modal-close",
        "state:closing",
        "close-callback",
        "state:destroyed",
    ]
    assert trace[2].startswith("t=0.000")
    assert trace[4].startswith("t=1.500")
    assert trace[-1].startswith("t=1.800")


@pytest.mark.parametrize("trigger", [cli.Trigger.ESC, cli.Trigger.BACKDROP])
def test_simulate_user_dismissal__destroyed(trigger: cli.Trigger) -> None:
    trace = cli.run_simulation(trigger)

    assert "bus:modal-close" in _labels(trace)
    assert _labels(trace)[-1] == "state:destroyed"


@pytest.mark.parametrize("trigger", [cli.Trigger.CONTENT_CLICK, cli.Trigger.OTHER_FORM])
def test_simulate_ignored_trigger__stays_open(trigger: cli.Trigger) -> None:
    trace = cli.run_simulation(trigger)

    assert _labels(trace) == ["element:modal-open", "state:open", "state:open"]


def test_simulate_backdrop_without_can_close__stays_open() -> None:
    trace = cli.run_simulation(cli.Trigger.BACKDROP, can_close=False)

    assert _labels(trace)[-1] == "state:open"


def test_simulate_command_prints_trace() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["simulate", "esc", "--child", "notes"])

    assert result.exit_code == 0
    assert "unmount notes" in result.stdout
    assert "state:destroyed" in result.stdout


def test_simulate_command_invalid_options__exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*_args: object, **_kwargs: object) -> list[str]:
        raise InvalidOptions("bad options")

    monkeypatch.setattr(cli, "run_simulation", fail)
    runner = CliRunner()
    result = runner.invoke(cli.app, ["simulate", "close"])

    assert result.exit_code == 1
