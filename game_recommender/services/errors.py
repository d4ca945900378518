"""Error handling for the game recommender.

This module provides:
- Custom exception classes for catalog loading and query failures
- User-friendly error message generation with suggested actions
- A centralized error handling service that keeps a short error history
"""

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    DATA_FORMAT = "data_format"
    FILE_SYSTEM = "file_system"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorContext:
    """Context information for an error."""
    operation: str
    component: str
    details: dict[str, Any]


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class InvalidArgumentError(AppError, ValueError):
    """Raised when a query argument is outside its accepted range."""

    def __init__(self, message: str, argument: str, value: Any = None) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.INVALID_ARGUMENT,
            severity=ErrorSeverity.WARNING,
            suggested_actions=[f"Pass a valid value for '{argument}'"],
            technical_details=f"Argument: {argument}\nValue: {value!r}",
            recoverable=True,
        )
        self.argument = argument
        self.value = value


class GameNotFoundError(AppError, LookupError):
    """Raised when a lookup matches no game in the catalog."""

    def __init__(self, message: str, platform: str | None = None) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.WARNING,
            suggested_actions=[
                "Check the platform name spelling",
                "List known platforms with get_all_games_by_platform()",
            ],
            technical_details=f"Platform: {platform!r}",
            recoverable=True,
        )
        self.platform = platform


class MalformedLineError(AppError):
    """Raised when a dataset line does not have the expected shape.

    The catalog drops such lines instead of failing.
    """

    def __init__(self, message: str, field_count: int, expected: int, line: str | None = None) -> None:
        technical_details = f"Fields: {field_count}, expected: {expected}"
        if line is not None:
            technical_details += f"\nLine: {line[:100]}"  # Truncate long lines

        super().__init__(
            message=message,
            category=ErrorCategory.DATA_FORMAT,
            severity=ErrorSeverity.WARNING,
            suggested_actions=["Make sure every row has one value per column"],
            technical_details=technical_details,
            recoverable=True,
        )
        self.field_count = field_count
        self.expected = expected
        self.line = line


class InvalidGameDataError(AppError, ValueError):
    """Raised when a well-shaped line holds a value that cannot be parsed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        line_number: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        suggested_actions = ["Fix the offending row in the dataset"]
        if field == "release_date":
            suggested_actions.append("Dates must look like 10-Nov-2014")

        technical_details = None
        if line_number is not None:
            technical_details = f"Line: {line_number}"
        if field:
            technical_details = (technical_details or "") + f"\nField: {field}"
        if value is not None:
            technical_details = (technical_details or "") + f"\nValue: {str(value)[:100]}"
        if original_error:
            technical_details = (technical_details or "") + f"\nError: {type(original_error).__name__}: {original_error}"

        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=False,
        )
        self.field = field
        self.value = value
        self.line_number = line_number
        self.original_error = original_error

    def at_line(self, line_number: int) -> "InvalidGameDataError":
        """Return a copy of this error tagged with the dataset line number."""
        return InvalidGameDataError(
            message=f"{self.message} (line {line_number})",
            field=self.field,
            value=self.value,
            line_number=line_number,
            original_error=self.original_error,
        )


class FileSystemError(AppError):
    """Exception for file system-related errors."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        path: str | None = None,
        operation: str | None = None,
    ) -> None:
        suggested_actions = self._get_suggested_actions(original_error)

        technical_details = None
        if original_error:
            technical_details = f"{type(original_error).__name__}: {str(original_error)}"
        if path:
            technical_details = f"Path: {path}" + (f"\n{technical_details}" if technical_details else "")

        super().__init__(
            message=message,
            category=ErrorCategory.FILE_SYSTEM,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.original_error = original_error
        self.path = path
        self.operation = operation

    @staticmethod
    def _get_suggested_actions(original_error: Exception | None) -> list[str]:
        """Get suggested actions based on error type."""
        if isinstance(original_error, PermissionError):
            return [
                "Check file permissions",
                "Copy the dataset somewhere readable",
            ]
        elif isinstance(original_error, FileNotFoundError):
            return [
                "Verify the dataset path is correct",
                "Check if the file was moved or deleted",
            ]
        elif isinstance(original_error, IsADirectoryError):
            return ["Point to the dataset file, not its directory"]
        elif isinstance(original_error, UnicodeDecodeError):
            return [
                "Check the dataset encoding",
                "Set 'encoding' in the configuration",
            ]

        return [
            "Check the file path and permissions",
            "Try reading the dataset again",
        ]


class ConfigurationError(AppError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
    ) -> None:
        suggested_actions = [
            "Check the configuration settings",
            "Reset to default values if needed",
        ]
        if expected:
            suggested_actions.append(f"Expected: {expected}")

        technical_details = None
        if setting:
            technical_details = f"Setting: {setting}"
        if current_value is not None:
            technical_details = (technical_details or "") + f"\nCurrent: {current_value}"

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.setting = setting
        self.current_value = current_value
        self.expected = expected


class ErrorHandlingService:
    """Centralized error handling service.

    Classifies exceptions, logs their technical details and keeps a bounded
    history so callers can inspect what went wrong during loading.
    """

    def __init__(self, max_history_size: int = 100) -> None:
        self._error_history: list[tuple[float, AppError]] = []
        self._max_history_size = max_history_size
        log.debug("Error handling service initialized")

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Handle an error and return a user-friendly representation.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information

        Returns:
            User-friendly error representation
        """
        app_error = self._convert_to_app_error(error, operation, component, context)

        self._log_error(app_error, operation, component, context)

        self._error_history.append((time.time(), app_error))
        if len(self._error_history) > self._max_history_size:
            self._error_history.pop(0)

        return app_error.to_user_friendly()

    def _convert_to_app_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> AppError:
        """Convert a standard exception to an AppError."""
        if isinstance(error, AppError):
            return error

        path = context.get("path") if context else None

        # UnicodeDecodeError is a ValueError, but for a dataset it is a read failure
        if isinstance(error, UnicodeDecodeError):
            return FileSystemError(
                message="The dataset could not be decoded with the configured encoding.",
                original_error=error,
                path=path,
                operation=operation,
            )
        elif isinstance(error, PermissionError):
            return FileSystemError(
                message="Permission denied while reading the dataset.",
                original_error=error,
                path=path,
                operation=operation,
            )
        elif isinstance(error, FileNotFoundError):
            return FileSystemError(
                message="The dataset file was not found.",
                original_error=error,
                path=path,
                operation=operation,
            )
        elif isinstance(error, OSError):
            return FileSystemError(
                message=f"Reading the dataset failed: {error}",
                original_error=error,
                path=path,
                operation=operation,
            )
        elif isinstance(error, json.JSONDecodeError):
            return ConfigurationError(
                message="Invalid JSON format. The configuration could not be parsed.",
                setting="json_content",
            )
        elif isinstance(error, ValueError):
            return InvalidGameDataError(
                message=str(error),
                field=context.get("field") if context else None,
                value=context.get("value") if context else None,
                original_error=error,
            )

        return AppError(
            message="An unexpected error occurred.",
            category=ErrorCategory.UNEXPECTED,
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(error).__name__}: {str(error)}",
            recoverable=True,
            context=ErrorContext(
                operation=operation,
                component=component,
                details=context or {},
            ),
        )

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        """Log error with full technical details."""
        log_method = log.warning if error.severity == ErrorSeverity.WARNING else log.error

        log_method(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            recoverable=error.recoverable,
            context=context,
        )

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """Get the most recent errors, oldest first."""
        recent = self._error_history[-count:] if self._error_history else []
        return [error for _, error in recent]

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        """Get count of errors by category."""
        counts: dict[ErrorCategory, int] = {}
        for _, error in self._error_history:
            counts[error.category] = counts.get(error.category, 0) + 1
        return counts

    def clear_history(self) -> None:
        self._error_history.clear()

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Create a formatted user message from an error.

        Args:
            error: The user-friendly error
            include_suggestions: Whether to include suggested actions

        Returns:
            Formatted message string
        """
        parts = [error.message]

        if include_suggestions and error.suggested_actions:
            parts.append("\nSuggested actions:")
            for action in error.suggested_actions[:3]:  # Limit to 3 suggestions
                parts.append(f"  • {action}")

        return "\n".join(parts)


# Global error handling service instance
_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Convenience function to handle errors using the global service."""
    return get_error_service().handle_error(error, operation, component, context)
