"""Configuration service for dataset reading settings."""

import codecs
import json
from pathlib import Path

import structlog

from ..models import CatalogConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing catalog configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "game-recommender" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> CatalogConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults", config_path=str(self.config_path))
            return self.get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self.get_default_config()

            log.info("Configuration loaded successfully", config_path=str(self.config_path))
            return config

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self.get_default_config()

    def save_config(self, config: CatalogConfig) -> None:
        """Validate and save configuration to file."""
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
                current_value=config,
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config_to_dict(config), f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully", config_path=str(self.config_path))

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: CatalogConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not isinstance(config.delimiter, str) or len(config.delimiter) != 1:
            errors.append("delimiter must be a single character")

        if not isinstance(config.date_format, str) or "%" not in config.date_format:
            errors.append("date_format must be a strptime format string")

        if not isinstance(config.encoding, str):
            errors.append("encoding must be a string")
        else:
            try:
                codecs.lookup(config.encoding)
            except LookupError:
                errors.append(f"encoding '{config.encoding}' is not known")

        if config.dataset_path is not None:
            if not isinstance(config.dataset_path, Path):
                errors.append("dataset_path must be a Path object")
            elif not config.dataset_path.is_absolute():
                errors.append("dataset_path must be an absolute path")

        return ValidationResult(len(errors) == 0, errors)

    @staticmethod
    def get_default_config() -> CatalogConfig:
        return CatalogConfig()

    def _config_to_dict(self, config: CatalogConfig) -> dict[str, str | int | bool | None]:
        """Convert CatalogConfig to dictionary for JSON serialization."""
        return {
            "delimiter": config.delimiter,
            "date_format": config.date_format,
            "encoding": config.encoding,
            "has_header": config.has_header,
            "dataset_path": str(config.dataset_path) if config.dataset_path else None,
        }

    def _dict_to_config(self, data: dict[str, str | int | bool | None]) -> CatalogConfig:
        """Convert dictionary to CatalogConfig, falling back to defaults per key."""
        defaults = self.get_default_config()

        dataset_path_raw = data.get("dataset_path")
        dataset_path = Path(str(dataset_path_raw)) if dataset_path_raw else None

        has_header_raw = data.get("has_header", defaults.has_header)

        return CatalogConfig(
            delimiter=str(data.get("delimiter", defaults.delimiter)),
            date_format=str(data.get("date_format", defaults.date_format)),
            encoding=str(data.get("encoding", defaults.encoding)),
            has_header=has_header_raw if isinstance(has_header_raw, bool) else defaults.has_header,
            dataset_path=dataset_path,
        )
