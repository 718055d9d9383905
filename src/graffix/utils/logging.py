"""Logging utilities for Graffix."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class GenerationStats:
    """Statistics from one layout generation."""

    glyph_count: int = 0
    space_count: int = 0
    alternate_count: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    overlaps: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate generation duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_overlap(self) -> float | None:
        if not self.overlaps:
            return None
        return sum(self.overlaps) / len(self.overlaps)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

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

    logger = structlog.get_logger("graffix")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class GenerationLogger:
    """Logger for tracking layout generation and its statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = GenerationStats()

    def log_glyph_resolved(self, character: str, asset: str, variant: str, index: int) -> None:
        """Log the asset chosen for a character."""
        self._logger.debug(
            "Glyph resolved",
            char=character,
            asset=asset,
            variant=variant,
            index=index,
        )
        self._stats.glyph_count += 1
        if variant == "alternate":
            self._stats.alternate_count += 1

    def log_space(self, index: int) -> None:
        self._logger.debug("Space glyph", index=index)
        self._stats.glyph_count += 1
        self._stats.space_count += 1

    def log_layout(self, text: str, positions: tuple[float, ...], overlaps: tuple[float, ...]) -> None:
        """Log the result of the kerning fold."""
        self._stats.overlaps.extend(overlaps[1:])
        self._logger.info(
            "Layout computed",
            text=text,
            glyphs=len(positions),
            width=round(positions[-1], 2) if positions else 0,
            avg_overlap=round(self._stats.avg_overlap, 4) if self._stats.avg_overlap else None,
        )

    def log_generation_error(self, text: str, error: Exception) -> None:
        """Log an aborted generation."""
        self._logger.error(
            "Layout generation failed",
            text=text,
            error=str(error),
            error_type=type(error).__name__,
        )

    def record_cache(self, hits: int, misses: int) -> None:
        self._stats.cache_hits = hits
        self._stats.cache_misses = misses

    @property
    def stats(self) -> GenerationStats:
        """Get current generation statistics."""
        return self._stats
