"""
Logging configuration for the ``pthm`` process.

main.py calls ``setup_logging`` once; modules log through
``logging.getLogger(__name__)``. Messages go to stderr so they never
mix with ``--json`` output or with what the shell hook prints.

Console level precedence:
    --debug / DEBUG=1|true  >  --verbose  >  --quiet  >  PTH_MANAGER_LOG_LEVEL  >  WARNING

PTH_MANAGER_LOG_FILE adds a file handler, at PTH_MANAGER_LOG_FILE_LEVEL
when set.
"""

from __future__ import annotations

import logging
import sys

_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%Y-%m-%d %H:%M:%S")

# (threshold, (format, datefmt)); first threshold >= level wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S")),
    (logging.INFO, ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S")),
    (logging.CRITICAL, ("[pth-manager] %(levelname)s: %(message)s", None)),
)


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    default: str | None = None,
) -> str:
    """Pick the console level name from CLI flags and the env default."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return default or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a stderr handler (and a file one)."""
    console_level = _parse_level(level)
    handlers: list[logging.Handler] = [
        _handler(logging.StreamHandler(sys.stderr), console_level, _console_format(console_level))
    ]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), file_level, _FILE_FORMAT)
        )

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    # a broken stderr must not turn into a failed cd
    logging.raiseExceptions = False


def _handler(
    handler: logging.Handler, level: int, fmt: tuple[str, str | None]
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt[0], datefmt=fmt[1]))
    return handler


def _console_format(level: int) -> tuple[str, str | None]:
    for threshold, fmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return fmt
    return _CONSOLE_FORMATS[-1][1]


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
