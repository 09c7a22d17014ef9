import logging
import sys

import click
import psutil
from dotenv import load_dotenv

from root_barrier.barrier import StabilizationBarrier
from root_barrier.config import BarrierConfig
from root_barrier.errors import RootBarrierError
from root_barrier.lifecycle.process import ProcessLifecycleMonitor
from root_barrier.roots import matchers

load_dotenv()

logger = logging.getLogger("root_barrier")

MATCHERS = {
    "default": lambda: matchers.DEFAULT_ROOT_MATCHER,
    "any": matchers.any_root,
    "dialog": matchers.is_dialog,
    "focusable": matchers.is_focusable,
}


def resolve_pids(pids, process_names) -> list[int]:
    """Combine explicit PIDs with the PIDs of processes matching any of ``process_names``."""
    resolved = list(pids)
    wanted = {name.lower() for name in process_names}
    if wanted:
        for proc in psutil.process_iter(["pid", "name"]):
            name = (proc.info.get("name") or "").lower()
            if name in wanted:
                resolved.append(proc.info["pid"])
    return list(dict.fromkeys(resolved))


def _windows_backend():
    # pywin32/comtypes only import on Windows.
    from root_barrier.windows.pump import Win32MessagePump
    from root_barrier.windows.service import Win32RootsOracle

    return Win32RootsOracle, Win32MessagePump


@click.command()
@click.option(
    "--pid",
    "pids",
    help="PID of a process under test. Repeat for several processes.",
    multiple=True,
    type=int,
)
@click.option(
    "--process-name",
    "process_names",
    help="Executable name of a process under test, e.g. notepad.exe. Repeatable.",
    multiple=True,
    type=str,
)
@click.option(
    "--match",
    help="Which roots to select.",
    type=click.Choice(list(MATCHERS)),
    default="default",
    show_default=True,
)
@click.option(
    "--multi",
    help="Return every matching root instead of the best one; window focus is not required.",
    is_flag=True,
    default=False,
)
@click.option("--verbose", help="Log every wait step.", is_flag=True, default=False)
def main(pids, process_names, match, multi, verbose):
    """Wait until the windows of a process are stable, then print them."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    resolved = resolve_pids(pids, process_names)
    if not resolved:
        click.echo(
            "Error: no process to watch. Pass --pid or a --process-name that is running.",
            err=True,
        )
        sys.exit(1)

    matcher = MATCHERS[match]()
    if multi:
        matcher = matchers.multi(matcher)

    oracle_cls, pump_cls = _windows_backend()
    oracle = oracle_cls(pids=resolved)
    monitor = ProcessLifecycleMonitor(resolved, window_pids=oracle.get_window_pids)
    try:
        with pump_cls() as pump:
            barrier = StabilizationBarrier(oracle, pump, monitor, config=BarrierConfig.from_env())
            selection = barrier.get_stable_selection(matcher)
    except RootBarrierError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for root in selection.selected:
        click.echo(str(root))
    logger.info("%d stable root(s) for matcher '%s'", len(selection.selected), matcher)


if __name__ == "__main__":
    main()
