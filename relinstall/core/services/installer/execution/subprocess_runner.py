"""
L4 Execution — Core subprocess runner.

The single place where ``subprocess.run`` is called by the installer.
Results come back as a plain dict so checks can decide for themselves
whether a failing command is fatal.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str],
    *,
    input_text: str | None = None,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Run a command to completion and capture its output.

    Args:
        cmd: Command list for ``subprocess.run()``.
        input_text: Optional text piped to stdin.
        timeout: Seconds before ``TimeoutExpired`` (None waits forever).

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    logger.debug("Running: %s", cmd)
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            input=input_text,
            timeout=timeout,
        )
    except FileNotFoundError:
        return {"ok": False, "error": f"Command not found: {cmd[0]}"}
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        return {"ok": False, "error": f"Cannot run {cmd[0]}: {e}"}

    elapsed_ms = int((time.monotonic() - start) * 1000)

    if result.returncode == 0:
        return {"ok": True, "stdout": result.stdout, "elapsed_ms": elapsed_ms}

    stderr = result.stderr[-2000:] if result.stderr else ""
    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": stderr,
        "elapsed_ms": elapsed_ms,
    }
