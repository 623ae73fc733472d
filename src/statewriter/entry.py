import sys
from typing import List

import typer

from .cli import app
from .shutdown import EarlySignals
from .util import prog_name


def main(argv: List[str] | None = None, prog: str | None = None):
    if argv is None:
        argv = sys.argv[1:]
    if prog is None:
        prog = prog_name()

    # Exactly one positional path; checked before Click so no file is touched
    if len(argv) != 1:
        typer.echo(f"usage: {prog} <file>", err=True)
        raise SystemExit(1)

    # Until the event loop takes the signals over, only record them
    early = EarlySignals().capture()

    # "--" keeps a path like "-x" or "--help" positional; there are no flags
    return app(args=["--", argv[0]], prog_name=prog, obj=early)
