"""
nightduty logging
=================
Everything logs under the ``nightduty`` logger tree:

    nightduty.solver              run phases, totals, timing
    nightduty.solver.placement    one block per staff member, degradations
    nightduty.solver.quota        quota bookkeeping, compensation, reduction
    nightduty.solver.continuous   chosen windows
    nightduty.solver.distributed  candidate and accepted dates
    nightduty.solver.validation   post-run checks

Console output goes to stderr so that stdout stays free for schedule output
(the CLI prints JSON there). A rotating file handler is optional.

TRACE (5) carries the entry/exit lines written by ``log_function_call``.
WARNING is reserved for the messages that also land in ``stats.errors``.
"""
import functools
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

ROOT_LOGGER = "nightduty"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Level-coloured console lines; plain text when the stream is not a tty."""

    COLORS = {
        TRACE: "\033[90m",
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = False):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if self.use_color and color:
            return f"{color}{message}{self.RESET}"
        return message


def _level(name: Optional[str], default: int = logging.INFO) -> int:
    if not name:
        return default
    if name.upper() == "TRACE":
        return TRACE
    return getattr(logging, name.upper(), default)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/nightduty.log",
    console_level: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach console and (optionally) rotating file handlers to ``nightduty``.

    Calling it again replaces the previous handlers.

    Args:
        level: File handler level ("TRACE" is accepted)
        log_file: Log file path, None for console only
        console_level: Console level, defaults to level
        max_bytes: Rotation size
        backup_count: Rotated files to keep
        stream: Console stream, stderr by default

    Returns:
        The ``nightduty`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(TRACE)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    file_level = _level(level)
    cons_level = _level(console_level or level)
    stream = stream or sys.stderr

    console = logging.StreamHandler(stream)
    console.setLevel(cons_level)
    console.setFormatter(ColoredFormatter(
        CONSOLE_FORMAT,
        datefmt="%H:%M:%S",
        use_color=hasattr(stream, "isatty") and stream.isatty(),
    ))
    logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.debug(
        f"Logging ready: console={logging.getLevelName(cons_level)}, "
        f"file={log_file or 'off'}"
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger inside the nightduty tree, e.g. "nightduty.solver.quota"."""
    return logging.getLogger(name)


def log_function_call(func: Callable) -> Callable:
    """
    Trace entry and exit of an engine function at TRACE level.

    Arguments and return values are shortened; exceptions are logged at
    ERROR and re-raised unchanged.
    """
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        name = func.__name__
        if logger.isEnabledFor(TRACE):
            shown = [repr(a)[:50] for a in args[:3]]
            shown += [f"{k}={repr(v)[:30]}" for k, v in list(kwargs.items())[:3]]
            logger.log(TRACE, f"→ {name}({', '.join(shown)})")

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"✖ {name} raised: {type(e).__name__}: {e}")
            raise

        if logger.isEnabledFor(TRACE):
            logger.log(TRACE, f"← {name} returned: {repr(result)[:100]}")
        return result

    return wrapper


def log_constraint(
    logger: logging.Logger,
    name: str,
    satisfied: bool,
    details: str = "",
    level: int = logging.DEBUG,
):
    """One line per schedule check: "[✓] name (details)", failures at WARNING."""
    msg = f"[{'✓' if satisfied else '✗'}] {name}"
    if details:
        msg += f" ({details})"
    logger.log(level if satisfied else logging.WARNING, msg)


class SolverLogger:
    """Indented phase/step/per-staff output for a placement run."""

    def __init__(self, name: str = "nightduty.solver"):
        self.logger = logging.getLogger(name)
        self.indent = 0

    def _prefix(self) -> str:
        return "  " * self.indent

    def phase(self, name: str):
        self.logger.info(f"{'=' * 20} {name} {'=' * 20}")

    def step(self, description: str):
        self.logger.info(f"{self._prefix()}▸ {description}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"{self._prefix()}  {key}: {value}")

    def enter(self, context: str):
        """Open a nested block, e.g. one staff member."""
        self.logger.debug(f"{self._prefix()}┌─ {context}")
        self.indent += 1

    def exit(self, context: str = ""):
        self.indent = max(0, self.indent - 1)
        if context:
            self.logger.debug(f"{self._prefix()}└─ {context}")
