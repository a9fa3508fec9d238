"""Command-line interface for the dialog lifecycle package using Typer.

Features:
- `simulate` command that drives one modal through a close trigger on a
  virtual clock and prints the resulting signal trace.
- Verbose mode for detailed logging.
"""

import enum
from typing import Annotated, Any

import typer

from dialog_lifecycle import __version__
from dialog_lifecycle.core import signals
from dialog_lifecycle.core.bus import EventBus
from dialog_lifecycle.core.element import Element
from dialog_lifecycle.core.lifecycle import ModalDialog, create
from dialog_lifecycle.core.registry import InstanceRegistry
from dialog_lifecycle.core.scheduler import ManualClock
from dialog_lifecycle.utils.constant import ESC_KEY_CODE
from dialog_lifecycle.utils.logging_config import configure_logging, get_logger
from dialog_lifecycle.validation.schemas import InvalidOptions

logger = get_logger(__name__)

# Clock resolution used when stepping through a simulation
SIMULATION_STEP_SEC = 0.1


class Trigger(str, enum.Enum):  # noqa: UP042
    """Ways of closing the simulated modal."""

    CLOSE = "close"
    ESC = "esc"
    BACKDROP = "backdrop"
    CONTENT_CLICK = "content-click"
    FORM_SUCCESS = "form-success"
    OTHER_FORM = "other-form"


def version_callback(value: bool) -> None:
    """Show the application's version and exit.

    Args:
        value: When True, print the version and exit.

    Raises:
        typer.Exit: Always raised after printing when value is True.

    """
    if value:
        print(f"dialog-lifecycle version: {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="dialog-lifecycle",
    help="Developer tools for the modal lifecycle controller.",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the application's version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Print help when no subcommand is given.

    Args:
        ctx: Typer context.
        version: Whether to print version and exit.

    Raises:
        typer.Exit: Raised to terminate after displaying help or version.

    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


class _Child:
    """Stand-in child component that records its unmount."""

    def __init__(self, instance_id: str, trace: list[str], clock: ManualClock) -> None:
        self.instance_id = instance_id
        self._trace = trace
        self._clock = clock

    def unmount(self) -> None:
        self._trace.append(f"t={self._clock.now:.3f} unmount {self.instance_id}")


def _fire_trigger(modal: ModalDialog, trigger: Trigger, bus: EventBus, form_id: str) -> None:
    element = modal.get_element()
    content = element.find("form") or element
    if trigger is Trigger.CLOSE:
        modal.close()
    elif trigger is Trigger.ESC:
        content.trigger(signals.KEYUP, which=ESC_KEY_CODE)
    elif trigger is Trigger.BACKDROP:
        element.trigger(signals.CLICK)
    elif trigger is Trigger.CONTENT_CLICK:
        content.trigger(signals.CLICK)
    elif trigger is Trigger.FORM_SUCCESS:
        bus.emit(signals.FORM_SUCCESS, content, form_id)
    else:
        bus.emit(signals.FORM_SUCCESS, content, f"not-{form_id}")


def run_simulation(
    trigger: Trigger,
    *,
    title: str = "Simulated modal",
    form_id: str = "simulatedForm",
    children: list[str] | None = None,
    can_close: bool = True,
    horizon: float = 3.0,
) -> list[str]:
    """Drive one modal through ``trigger`` and return the signal trace.

    Args:
        trigger: Close trigger to fire right after opening.
        title: Modal title.
        form_id: Form id the modal closes on.
        children: Child instance ids to register and clean on close.
        can_close: Whether backdrop clicks may close the modal.
        horizon: Simulated seconds to run after the trigger.

    Returns:
        Trace lines in the order the signals occurred.
    """
    clock = ManualClock()
    bus = EventBus()
    registry = InstanceRegistry()
    trace: list[str] = []

    def record(label: str) -> Any:
        return lambda *args: trace.append(f"t={clock.now:.3f} {label}")

    for name in (signals.BUS_MODAL_CLOSE, signals.BUS_MODAL_CLOSE_SOON, signals.BUS_DIALOG_CLOSE):
        bus.on(name, record(f"bus:{name}"))

    page = Element("body")
    page.on(signals.MODAL_OPEN, record(f"element:{signals.MODAL_OPEN}"))
    page.on(signals.MODAL_CLOSE, record(f"element:{signals.MODAL_CLOSE}"))
    wrapper = page.append(Element("div", "modal"))
    wrapper.append(Element("form", form_id))

    for instance_id in children or []:
        registry.register(instance_id, _Child(instance_id, trace, clock))

    modal = create(
        wrapper,
        {
            "title": title,
            "canClose": can_close,
            "closeOnFormSuccessId": form_id,
            "closeCleanInstanceIds": list(children or []),
            "closeCallback": record("close-callback"),
        },
        bus=bus,
        registry=registry,
        scheduler=clock,
    )
    trace.append(f"t={clock.now:.3f} state:{modal.state.value}")

    _fire_trigger(modal, trigger, bus, form_id)
    trace.append(f"t={clock.now:.3f} state:{modal.state.value}")

    state = modal.state
    steps = round(horizon / SIMULATION_STEP_SEC)
    for _ in range(steps):
        clock.advance(SIMULATION_STEP_SEC)
        if modal.state is not state:
            state = modal.state
            trace.append(f"t={clock.now:.3f} state:{state.value}")
    return trace


@app.command()
def simulate(
    trigger: Annotated[
        Trigger,
        typer.Argument(help="How the modal gets closed."),
    ] = Trigger.CLOSE,
    title: Annotated[str, typer.Option(help="Modal title.")] = "Simulated modal",
    form_id: Annotated[
        str, typer.Option("--form-id", help="Form id the modal closes on.")
    ] = "simulatedForm",
    child: Annotated[
        list[str] | None,
        typer.Option("--child", "-c", help="Child instance id to clean on close."),
    ] = None,
    can_close: Annotated[
        bool, typer.Option("--can-close/--no-can-close", help="Allow backdrop clicks.")
    ] = True,
    horizon: Annotated[
        float, typer.Option(min=0.0, help="Simulated seconds to run after the trigger.")
    ] = 3.0,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only errors.")] = False,
) -> list[str]:
    """Open a modal, fire TRIGGER and print every lifecycle signal.

    Returns:
        The printed trace lines.

    Raises:
        typer.Exit: With code 1 when the modal options are invalid.
    """
    configure_logging(verbose=verbose, quiet=quiet)
    try:
        trace = run_simulation(
            trigger,
            title=title,
            form_id=form_id,
            children=child,
            can_close=can_close,
            horizon=horizon,
        )
    except InvalidOptions as exc:
        logger.error(f"Cannot open modal: {exc}")
        raise typer.Exit(code=1) from exc

    for line in trace:
        typer.echo(line)
    return trace


if __name__ == "__main__":
    app()
