"""Logging utilities for Vectorize."""

import logging
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Number of recent errors and timings kept by RetraceStats
STATS_WINDOW = 100


def _window() -> deque:
    return deque(maxlen=STATS_WINDOW)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger that writes through the stdlib logger of that name.

    Until configure_logging() runs, events follow stdlib defaults: warnings
    and above reach stderr and everything else is dropped.
    """
    return structlog.wrap_logger(logging.getLogger(name))


@dataclass
class RetraceStats:
    """Statistics accumulated over a tracing session.

    Only the most recent STATS_WINDOW errors and timings are kept.
    """

    retrace_count: int = 0
    skipped_count: int = 0
    failure_count: int = 0
    bitmap_rebuilds: int = 0
    paths_skipped: int = 0
    errors: deque[str] = field(default_factory=_window)
    retrace_timings_ms: deque[float] = field(default_factory=_window)

    @property
    def avg_retrace_ms(self) -> float | None:
        """Average duration of completed retraces."""
        if not self.retrace_timings_ms:
            return None
        return sum(self.retrace_timings_ms) / len(self.retrace_timings_ms)

    @property
    def last_retrace_ms(self) -> float | None:
        if not self.retrace_timings_ms:
            return None
        return self.retrace_timings_ms[-1]


# Handlers installed by the last configure_logging() call
_installed_handlers: list[logging.Handler] = []


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        _installed_handlers.append(console_handler)

    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = get_logger("vectorize")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class RetraceLogger:
    """Logger for tracking retrace progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else get_logger("vectorize")
        self._stats = RetraceStats()

    def log_retrace_start(self, threshold: float, turd_size: int, corner_threshold: float) -> None:
        """Log start of a retrace."""
        self._logger.debug(
            "Retrace started",
            threshold=threshold,
            turd_size=turd_size,
            corner_threshold=corner_threshold,
        )

    def log_retrace_complete(self, curve_count: int, paths_skipped: int, duration_ms: float) -> None:
        """Log a published curve set."""
        self._logger.info(
            "Retrace complete",
            curves=curve_count,
            paths_skipped=paths_skipped,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.retrace_count += 1
        self._stats.paths_skipped += paths_skipped
        self._stats.retrace_timings_ms.append(duration_ms)

    def log_retrace_skipped(self, reason: str) -> None:
        """Log a retrace request that was dropped."""
        self._logger.debug("Retrace skipped", reason=reason)
        self._stats.skipped_count += 1

    def log_retrace_failed(self, error: Exception) -> None:
        """Log a retrace that kept the previous curve set."""
        self._logger.warning(
            "Retrace failed",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.failure_count += 1
        self._stats.errors.append(str(error))

    def log_bitmap_rebuilt(self, width: int, height: int, threshold: float, foreground: int) -> None:
        """Log a fresh binarization."""
        self._logger.debug(
            "Binary bitmap rebuilt",
            width=width,
            height=height,
            threshold=threshold,
            foreground=foreground,
        )
        self._stats.bitmap_rebuilds += 1

    def log_path_skipped(self, path_index: int, reason: str) -> None:
        """Log a traced path that did not reconstruct."""
        self._logger.debug("Path skipped", path=path_index, reason=reason)

    @property
    def stats(self) -> RetraceStats:
        """Get current session statistics."""
        return self._stats
