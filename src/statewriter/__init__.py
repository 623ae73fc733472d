from importlib.metadata import PackageNotFoundError, version as _pkg_version

from .shutdown import TERMINATION_SIGNALS, EarlySignals, ShutdownRequest
from .writer import ExitOutcome, StateWriterLoop, StdoutError, persist

__all__ = [
    "__version__",
    "EarlySignals",
    "ExitOutcome",
    "ShutdownRequest",
    "StateWriterLoop",
    "StdoutError",
    "TERMINATION_SIGNALS",
    "persist",
]

try:
    __version__ = _pkg_version("statewriter")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0+dev"
