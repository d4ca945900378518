"""Logging configuration for the game recommender."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

ENVIRONMENT_VARIABLE = "GAME_RECOMMENDER_ENV"


class LoggingService:
    """Service for configuring and managing application logging."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        console: bool = True,
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: The minimum log level to capture
            log_dir: Directory for log files (None for console only)
            console: If False, only file handlers are installed
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.console = console
        self.is_development = os.getenv(ENVIRONMENT_VARIABLE, "development") == "development"

    def configure(self) -> None:
        """Configure structlog on top of standard library logging."""
        self._configure_stdlib_logging()

        structlog.configure(
            processors=self._get_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _configure_stdlib_logging(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()

        numeric_level = getattr(logging, self.log_level, logging.INFO)
        root_logger.setLevel(numeric_level)

        if self.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(numeric_level)

            if self.is_development:
                console_formatter = logging.Formatter(
                    fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                    datefmt="%H:%M:%S",
                )
            else:
                # Production: the message already is a JSON document
                console_formatter = logging.Formatter("%(message)s")

            console_handler.setFormatter(console_formatter)
            root_logger.addHandler(console_handler)

        if self.log_dir:
            self._setup_file_logging(root_logger, numeric_level)

    def _setup_file_logging(self, root_logger: logging.Logger, level: int) -> None:
        """Add the rotating catalog log and the error-only log under ``log_dir``."""
        if not self.log_dir:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        file_formatter = logging.Formatter("%(message)s")

        for filename, handler_level, max_bytes in (
            ("recommender.log", level, 5 * 1024 * 1024),
            ("error.log", logging.ERROR, 1024 * 1024),
        ):
            handler = logging.handlers.RotatingFileHandler(
                filename=self.log_dir / filename,
                maxBytes=max_bytes,
                backupCount=3,
                encoding="utf-8",
            )
            handler.setLevel(handler_level)
            handler.setFormatter(file_formatter)
            root_logger.addHandler(handler)

    def _get_processors(self) -> list[Any]:
        """Get the structlog processors for the environment."""
        common_processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if self.is_development and not self.log_dir:
            return common_processors + [structlog.dev.ConsoleRenderer(colors=False)]

        # Files and production consoles get JSON
        return common_processors + [structlog.processors.JSONRenderer()]


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    console: bool = True,
) -> LoggingService:
    """Set up application logging with the specified configuration.

    Args:
        log_level: Minimum log level to capture
        log_dir: Directory for log files (None for console only)
        environment: Environment name (development/production)
        console: Whether to log to stdout

    Returns:
        Configured LoggingService instance
    """
    if environment:
        os.environ[ENVIRONMENT_VARIABLE] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, console=console)
    service.configure()
    return service
