"""Data models for the game recommender."""

from .config import CatalogConfig
from .game import Game
from .results import KeywordSearchResult, LoadReport, QueryStatus, YearsActiveResult

__all__ = [
    "CatalogConfig",
    "Game",
    "KeywordSearchResult",
    "LoadReport",
    "QueryStatus",
    "YearsActiveResult",
]
