import os
import signal
import subprocess
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parent.parent / "src"


def start_statewriter(args, cwd, interval="0.05"):
    """Start ``python -m statewriter`` with piped stdio and a short cadence."""
    env = dict(os.environ)
    env["STATEWRITER_INTERVAL"] = interval
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    return subprocess.Popen(
        [sys.executable, "-m", "statewriter", *args],
        cwd=str(cwd),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )


@pytest.fixture(scope="function")
def statewriter(tmp_path):
    procs = []

    def _start(*args, interval="0.05"):
        proc = start_statewriter(args, tmp_path, interval=interval)
        procs.append(proc)
        return proc

    yield _start
    for proc in procs:
        if proc.poll() is None:
            proc.kill()
        proc.communicate()


@pytest.fixture(autouse=True)
def restore_signal_dispositions():
    """In-process CLI runs leave the termination signals ignored or recorded."""
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGHUP, signal.SIGTERM)}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)
