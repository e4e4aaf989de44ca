"""Logging utilities for Cartoclip.

Library modules log through the standard ``logging`` module; the CLI calls
configure_logging() once to attach handlers and route structlog events
through the same root logger as JSON.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


@dataclass
class ClipStats:
    """Running totals for the paths handled in one CLI invocation."""

    paths_processed: int = 0
    segments_in: int = 0
    segments_out: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Wall time from the first path started to the last one finished."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Attach console and optional file handlers and set up structlog.

    Args:
        log_file: File receiving every record at file_level and above;
            nothing is written to disk when None
        console_level: Threshold for records shown on stderr
        file_level: Threshold for records written to log_file
        quiet: Raise the console threshold to ERROR

    Returns:
        The ``cartoclip`` structlog logger

    Raises:
        ValueError: If a level name is not a logging level
    """
    console_threshold = logging.ERROR if quiet else _level(console_level)
    file_threshold = _level(file_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(console_threshold)
    console.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console)

    if log_file is not None:
        to_file = logging.FileHandler(log_file, encoding="utf-8")
        to_file.setLevel(file_threshold)
        to_file.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(to_file)

    structlog.configure(
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("cartoclip")
    logger.debug("Logging configured", log_file=str(log_file) if log_file else None)
    return logger


class ClippingLogger:
    """Wraps a structlog logger and keeps ClipStats for every path it reports."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ClipStats()

    @property
    def stats(self) -> ClipStats:
        return self._stats

    def log_path_start(self, name: str, segment_count: int) -> None:
        if self._stats.start_time is None:
            self._stats.start_time = time.time()
        self._logger.debug("Clipping path", path=name, segments=segment_count)

    def log_path_complete(
        self,
        name: str,
        segments_in: int,
        segments_out: int,
        duration_ms: float,
    ) -> None:
        """Record a path that was clipped or projected without error."""
        stats = self._stats
        stats.paths_processed += 1
        stats.segments_in += segments_in
        stats.segments_out += segments_out
        stats.end_time = time.time()
        self._logger.info(
            "Path done",
            path=name,
            segments_in=segments_in,
            segments_out=segments_out,
            duration_ms=round(duration_ms, 2),
        )

    def log_path_error(self, name: str, error: Exception) -> None:
        """Record a path whose clipping raised."""
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))
        self._logger.error(
            "Path failed",
            path=name,
            error=str(error),
            error_type=type(error).__name__,
        )
