from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, TextIO, Union

import typer

from .shutdown import ShutdownRequest


PathLike = Union[str, "os.PathLike[str]"]


class StdoutError(OSError):
    """The per-cycle echo to stdout failed (e.g. the reading end of a pipe went away)."""


@dataclass(frozen=True)
class ExitOutcome:
    signum: Optional[int]
    cycles: int  # completed cycles == final counter value


def persist(path: PathLike, value: int, out: Optional[TextIO] = None) -> None:
    """Rewrite ``path`` with ``value`` and echo it to stdout (or ``out``)."""
    with open(path, "w") as fp:
        try:
            typer.echo(str(value), file=out)
        except OSError as e:
            raise StdoutError(e.errno, e.strerror) from e
        fp.write(f"{value}\n")
        fp.flush()


class StateWriterLoop:
    """Persist an incrementing counter once per cadence until shutdown."""

    def __init__(
        self,
        shutdown: ShutdownRequest,
        interval: float = 1.0,
        out: Optional[TextIO] = None,
    ) -> None:
        self.shutdown = shutdown
        self.interval = interval
        self.out = out
        self.counter = 0

    async def run(self, path: PathLike) -> ExitOutcome:
        # Observed once per cycle; a request during the write lands after close
        while not self.shutdown.requested:
            persist(path, self.counter, self.out)
            self.counter += 1
            if await self.shutdown.wait(self.interval):
                break
        return ExitOutcome(signum=self.shutdown.signum, cycles=self.counter)
