"""Service layer: dataset loading, queries and supporting infrastructure."""

from .config import ConfigurationService, ValidationResult
from .dataset import DatasetFileService
from .errors import (
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    FileSystemError,
    GameNotFoundError,
    InvalidArgumentError,
    InvalidGameDataError,
    MalformedLineError,
    UserFriendlyError,
    get_error_service,
    handle_error,
)
from .logging import LoggingService, setup_logging
from .parser import GameLineParser
from .recommender import GameRecommender

__all__ = [
    "AppError",
    "ConfigurationError",
    "ConfigurationService",
    "DatasetFileService",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FileSystemError",
    "GameLineParser",
    "GameNotFoundError",
    "GameRecommender",
    "InvalidArgumentError",
    "InvalidGameDataError",
    "LoggingService",
    "MalformedLineError",
    "UserFriendlyError",
    "ValidationResult",
    "get_error_service",
    "handle_error",
    "setup_logging",
]
