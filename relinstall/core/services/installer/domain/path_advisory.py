"""
L1 Domain — PATH advisory (pure).

After install, tell the user how to reach the binary if its directory
is not on the search path.  Informational only; never fails a run.
"""

from __future__ import annotations

import os
from pathlib import Path


def dir_on_path(directory: Path, path_env: str) -> bool:
    """Whether ``directory`` is one of the ``PATH`` entries."""
    target = os.path.normpath(str(directory))
    for entry in path_env.split(os.pathsep):
        if entry and os.path.normpath(os.path.expanduser(entry)) == target:
            return True
    return False


def export_line(directory: Path) -> str:
    """POSIX shell line that prepends ``directory`` to PATH."""
    return f'export PATH="{directory}:$PATH"'


def path_advisory(directory: Path, path_env: str) -> list[str] | None:
    """Guidance lines when ``directory`` is missing from PATH, else None."""
    if dir_on_path(directory, path_env):
        return None
    return [
        f"Directory {directory} is not in your $PATH.",
        "You may need to add it to your shell profile (e.g., ~/.bashrc, ~/.zshrc):",
        f"    {export_line(directory)}",
        "Restart your shell or source your profile file to apply changes.",
    ]
