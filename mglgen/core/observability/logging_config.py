"""
Logging setup for the mglgen CLI.

main.py calls ``setup_logging`` once; modules log through
``logging.getLogger(__name__)``.

What reaches the console:
    default    warnings only  ("WARNING: Ignored, not a regular file: x.go")
    --verbose  one line per rendered/derived file
    --debug    every gofmt/goimports invocation with its duration

MGLGEN_LOG_FILE adds a timestamped file log, at MGLGEN_LOG_FILE_LEVEL
(or the console level when unset).
"""

from __future__ import annotations

import logging
import sys

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s — %(message)s"


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Console level name: --debug, then --verbose, then --quiet, then the env."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _console_format(level: int) -> str:
    if level <= logging.DEBUG:
        return "%(levelname)s %(name)s: %(message)s"
    if level <= logging.INFO:
        return "mglgen: %(message)s"
    return "%(levelname)s: %(message)s"


def _level_number(name: str | None, default: int = logging.WARNING) -> int:
    """``"debug"`` → 10; unknown or empty names give ``default``."""
    if not name:
        return default
    number = logging.getLevelName(name.upper())
    return number if isinstance(number, int) else default


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root handlers with a stderr handler and an optional file."""
    console_level = _level_number(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_console_format(console_level)))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_level = _level_number(log_file_level, default=console_level)
        to_file = logging.FileHandler(log_file, encoding="utf-8")
        to_file.setLevel(file_level)
        to_file.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(to_file)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))
