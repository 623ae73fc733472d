from __future__ import annotations

import asyncio
import signal
from contextlib import suppress
from typing import Iterable, Optional


# interrupt, hangup, terminate; anything else keeps the OS default
TERMINATION_SIGNALS: tuple[signal.Signals, ...] = (
    signal.SIGINT,
    signal.SIGHUP,
    signal.SIGTERM,
)


class ShutdownRequest:
    """Cancellation context shared by the signal observers and the write loop.

    Set at most once: the first signal wins and is never cleared. The
    observers are registered through ``loop.add_signal_handler``, so the
    OS-level handler only pokes the event loop's wakeup fd and
    :meth:`request` itself runs as an ordinary loop callback.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._signum: Optional[int] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._installed: list[int] = []

    @property
    def requested(self) -> bool:
        return self._event.is_set()

    @property
    def signum(self) -> Optional[int]:
        return self._signum

    def request(self, signum: int) -> None:
        if self._signum is None:
            self._signum = int(signum)
        self._event.set()

    async def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait until shutdown is requested or ``timeout`` elapses.

        Returns True when shutdown was requested.
        """
        if self._event.is_set():
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def install(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        signals: Iterable[int] = TERMINATION_SIGNALS,
        early: Optional["EarlySignals"] = None,
    ) -> None:
        if loop is None:
            loop = asyncio.get_running_loop()
        self._loop = loop
        for sig in signals:
            loop.add_signal_handler(sig, self.request, sig)
            self._installed.append(int(sig))
        # Anything caught before the loop was up is replayed once the loop owns the signals
        if early is not None and early.signum is not None:
            self.request(early.signum)

    def uninstall(self, ignore: bool = False) -> None:
        """Remove the loop observers.

        With ``ignore`` the signals end up as SIG_IGN instead of the OS
        default, so a repeated request during interpreter teardown cannot
        kill the process after the shutdown was already accepted.
        """
        loop, self._loop = self._loop, None
        if loop is None:
            return
        sigs = list(self._installed)
        self._installed.clear()
        if ignore:
            # Held pending across the swap; SIG_IGN discards them on unblock
            signal.pthread_sigmask(signal.SIG_BLOCK, sigs)
        try:
            for sig in sigs:
                # Loop may already be closing; default disposition is restored either way
                with suppress(RuntimeError, ValueError):
                    loop.remove_signal_handler(sig)
                if ignore:
                    signal.signal(sig, signal.SIG_IGN)
        finally:
            if ignore:
                signal.pthread_sigmask(signal.SIG_UNBLOCK, sigs)


class EarlySignals:
    """Records termination signals that arrive before the event loop exists.

    The handler only stores the first signal number; :meth:`ShutdownRequest.install`
    takes over the signals and replays what was recorded.
    """

    def __init__(self, signals: Iterable[int] = TERMINATION_SIGNALS) -> None:
        self.signals = tuple(signals)
        self.signum: Optional[int] = None

    def _record(self, signum, frame):  # noqa: ARG002
        if self.signum is None:
            self.signum = signum

    def capture(self) -> "EarlySignals":
        for sig in self.signals:
            signal.signal(sig, self._record)
        return self
