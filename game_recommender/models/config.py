"""Configuration data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CatalogConfig:
    """Settings for reading a game dataset."""
    delimiter: str = ","
    date_format: str = "%d-%b-%Y"  # e.g. 10-Nov-2014
    encoding: str = "utf-8"
    has_header: bool = True
    dataset_path: Path | None = None
