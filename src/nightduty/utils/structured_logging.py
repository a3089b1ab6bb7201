"""
Run events for nightduty
========================
Each call to ``generate_night_schedule`` emits one structlog event,
``night_schedule_generated``, carrying the mode and the staff, day, night
and warning counts, with a ``run_id`` bound for the duration of the run.

Events go to stderr once ``configure_structlog`` has run. Without it,
structlog's own defaults apply.
"""
import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO

import structlog
import structlog.contextvars


def configure_structlog(json_output: bool = False, stream: Optional[TextIO] = None) -> None:
    """
    Route run events to ``stream`` (stderr by default).

    Args:
        json_output: One JSON object per line instead of the console renderer
        stream: Output stream
    """
    stream = stream or sys.stderr
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
    ]
    if json_output:
        processors += [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
        min_level = logging.INFO
    else:
        processors += [
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=hasattr(stream, "isatty") and stream.isatty()),
        ]
        min_level = logging.DEBUG

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(stream),
        cache_logger_on_first_use=False,
    )


def get_structured_logger(name: str) -> Any:
    """structlog logger for run events."""
    return structlog.get_logger(name)


@contextmanager
def run_context(**kwargs: Any) -> Iterator[None]:
    """
    Bind values (e.g. run_id) for the enclosed block only.

    Values the caller bound beforehand are left as they were.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
