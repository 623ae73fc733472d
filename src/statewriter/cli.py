import asyncio
import os
import sys
from typing import Optional

import typer

from .shutdown import EarlySignals, ShutdownRequest
from .util import interval_from_env, prog_name, signal_name
from .writer import ExitOutcome, StateWriterLoop, StdoutError


app = typer.Typer(
    name="statewriter",
    add_completion=False,
    help=(
        "Persist an incrementing counter to a file once per second until\n"
        "SIGINT, SIGHUP or SIGTERM arrives.\n\n"
        "Environment:\n"
        "  STATEWRITER_INTERVAL   Cadence in seconds (default 1.0)"
    ),
)


async def run_until_shutdown(
    path: str, interval: float, early: Optional[EarlySignals] = None
) -> ExitOutcome:
    shutdown = ShutdownRequest()
    shutdown.install(early=early)
    try:
        return await StateWriterLoop(shutdown, interval).run(path)
    finally:
        # Shutdown already decided; repeats until exit are absorbed
        shutdown.uninstall(ignore=True)


def _silence_stdout():
    # Interpreter flushes stdout again at exit and would report the broken pipe twice
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


@app.command()
def run(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File rewritten with the counter every cycle"),
):
    """Write the counter to PATH each cycle; exit 0 on a termination signal."""
    name = ctx.info_name or prog_name()
    try:
        interval = interval_from_env()
    except ValueError as e:
        typer.echo(f"{name}: {e}", err=True)
        raise typer.Exit(code=2)

    early = ctx.obj if isinstance(ctx.obj, EarlySignals) else None
    try:
        outcome = asyncio.run(run_until_shutdown(path, interval, early))
    except StdoutError as e:
        typer.echo(f"{name}: cannot write to stdout: {e.strerror or e}", err=True)
        if isinstance(e.__cause__, BrokenPipeError):
            _silence_stdout()
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"{name}: cannot write {path}: {e.strerror or e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"{name}: received {signal_name(outcome.signum)} ({outcome.signum}), "
        f"shutting down after {outcome.cycles} cycles",
        err=True,
    )
