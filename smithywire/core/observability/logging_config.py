"""
Logging configuration for the smithywire CLI.

Only the ``smithywire`` logger tree is configured, so a host embedding
the plugin keeps control of its own root logger.  The wiring pass logs
every diagnostic event at DEBUG or INFO (see ``diagnostics.py``); the
CLI decides how much of that reaches stderr.

Level precedence:
    --debug > --verbose > --quiet > SMITHYWIRE_LOG_LEVEL > WARNING

SMITHYWIRE_LOG_FILE adds a file handler, at SMITHYWIRE_LOG_FILE_LEVEL
(default: the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

PACKAGE_LOGGER = "smithywire"

ENV_LEVEL = "SMITHYWIRE_LOG_LEVEL"
ENV_FILE = "SMITHYWIRE_LOG_FILE"
ENV_FILE_LEVEL = "SMITHYWIRE_LOG_FILE_LEVEL"

# Console formats by level: events only, events with source, full location.
_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_MINIMAL = "%(message)s"
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    env = os.environ if environ is None else environ
    return _parse_level(env.get(ENV_LEVEL))


def setup_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> logging.Logger:
    """Configure the ``smithywire`` logger for a CLI run.

    Safe to call repeatedly; handlers from a previous call are replaced.

    Returns:
        The configured package logger.
    """
    env = os.environ if environ is None else environ
    level = resolve_level(debug=debug, verbose=verbose, quiet=quiet, environ=env)

    fmt, datefmt = _FORMATS.get(level, (_FMT_MINIMAL, None))
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    package = logging.getLogger(PACKAGE_LOGGER)
    for handler in package.handlers[:]:
        package.removeHandler(handler)
        handler.close()
    package.addHandler(console)

    effective = level
    log_file = env.get(ENV_FILE)
    if log_file:
        file_level = _parse_level(env.get(ENV_FILE_LEVEL), default=level)
        effective = min(effective, file_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt="%Y-%m-%d %H:%M:%S"))
        package.addHandler(fh)

    package.setLevel(effective)
    return package


def _parse_level(level: str | None, default: int = logging.WARNING) -> int:
    """Convert a level name to its numeric constant."""
    if not level:
        return default
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return default
    return numeric
