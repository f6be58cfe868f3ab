"""
Logging for the relinstall CLI.

``configure_logging()`` is called once per invocation by main.py; every
other module only does ``logger = logging.getLogger(__name__)``.

Console level:
    --debug  >  --verbose  >  --quiet  >  RELINSTALL_LOG_LEVEL  >  WARNING

File output:
    RELINSTALL_LOG_FILE, at RELINSTALL_LOG_FILE_LEVEL (default: console level)

Everything goes to stderr so ``--json`` output on stdout stays parseable.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "RELINSTALL_LOG_LEVEL"
ENV_FILE = "RELINSTALL_LOG_FILE"
ENV_FILE_LEVEL = "RELINSTALL_LOG_FILE_LEVEL"

# Console: the CLI prints its own status lines, so WARNING stays terse.
_CONSOLE_TERSE = ("%(levelname)s: %(message)s", None)
_CONSOLE_INFO = ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S")
_CONSOLE_DEBUG = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S")

_FILE_FMT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_DEBUG
    elif level <= logging.INFO:
        fmt, datefmt = _CONSOLE_INFO
    else:
        fmt, datefmt = _CONSOLE_TERSE
    return logging.Formatter(fmt, datefmt=datefmt)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the stderr handler and, optionally, a file handler.

    Unknown level names fall back to WARNING.  A log file that cannot be
    opened is reported on the console and otherwise ignored; logging
    problems never abort an install.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(console_level)

    if level and _parse_level(level, default=None) is None:
        logger.warning("Unknown log level %r, using WARNING", level)

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot open log file %s (%s); logging to stderr only", log_file, e)
        else:
            fh.setLevel(file_level)
            fh.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
            root.addHandler(fh)
            root.setLevel(min(console_level, file_level))

    logging.raiseExceptions = False


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level from CLI flags, falling back to the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def configure_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Resolve levels from flags and ``RELINSTALL_LOG_*``, then set up logging.

    Returns the console level name actually requested.
    """
    env = os.environ if environ is None else environ
    level = resolve_level(debug=debug, verbose=verbose, quiet=quiet, env_level=env.get(ENV_LEVEL))
    setup_logging(
        level,
        log_file=env.get(ENV_FILE) or None,
        log_file_level=env.get(ENV_FILE_LEVEL) or None,
    )
    return level


def _parse_level(level: str | None, default: int | None = logging.WARNING) -> int | None:
    if not level:
        return default
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else default
