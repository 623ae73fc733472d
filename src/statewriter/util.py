import math
import os
import signal
import sys
from pathlib import Path
from typing import Optional


DEFAULT_INTERVAL = 1.0


def prog_name(argv0: Optional[str] = None) -> str:
    """Program name for usage/diagnostic lines; ``python -m`` reports the package."""
    if argv0 is None:
        argv0 = sys.argv[0] if sys.argv else ""
    name = Path(argv0).name
    if not name or name in {"__main__.py", "-c", "-m"}:
        return "statewriter"
    return name


def interval_from_env() -> float:
    """Cadence in seconds from STATEWRITER_INTERVAL (default 1.0)."""
    raw = os.getenv("STATEWRITER_INTERVAL", "").strip()
    if not raw:
        return DEFAULT_INTERVAL
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"STATEWRITER_INTERVAL must be a number of seconds, got {raw!r}")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"STATEWRITER_INTERVAL must be a finite number >= 0, got {raw!r}")
    return value


def signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"
