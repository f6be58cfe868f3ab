"""
L4 Execution — Scoped temporary workspace.

Downloads land in a throwaway directory that is removed on every exit
path: normal return, exception, Ctrl-C, or SIGTERM/SIGHUP.  While the
scope is active those two signals are turned into ``SystemExit`` so the
``finally`` clause gets to run; previous handlers are restored on exit.
"""

from __future__ import annotations

import logging
import shutil
import signal
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

_CLEANUP_SIGNALS = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None))
    if sig is not None
)


def _exit_on_signal(signum: int, _frame: object) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def _signals_raise_exit() -> Iterator[None]:
    # signal.signal() only works from the main thread.
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {sig: signal.getsignal(sig) for sig in _CLEANUP_SIGNALS}
    for sig in _CLEANUP_SIGNALS:
        signal.signal(sig, _exit_on_signal)
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


@contextmanager
def scoped_workspace(binary: str) -> Iterator[Path]:
    """Create ``{binary}_install_*`` in the temp dir and always remove it."""
    with _signals_raise_exit():
        path = Path(tempfile.mkdtemp(prefix=f"{binary}_install_"))
        logger.debug("Workspace created: %s", path)
        try:
            yield path
        finally:
            shutil.rmtree(path, ignore_errors=True)
            logger.debug("Workspace removed: %s", path)
