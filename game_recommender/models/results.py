"""Typed outcomes for catalog loading and queries that can reject input."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .game import Game

if TYPE_CHECKING:
    from ..services.errors import UserFriendlyError


class QueryStatus(Enum):
    """Outcome of a query that validates its input instead of raising."""
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    UNKNOWN_PLATFORM = "unknown_platform"


@dataclass(frozen=True)
class KeywordSearchResult:
    """Result of a summary keyword search."""
    status: QueryStatus
    games: tuple[Game, ...] = ()
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.status is QueryStatus.OK


@dataclass(frozen=True)
class YearsActiveResult:
    """Number of years a platform has been live.

    ``years`` is 0 whenever ``status`` is not ``QueryStatus.OK``.
    """
    platform: str | None
    years: int
    status: QueryStatus = QueryStatus.OK


@dataclass(frozen=True)
class LoadReport:
    """What happened while a catalog was being built."""
    lines_read: int
    games_loaded: int
    skipped_lines: tuple[int, ...] = field(default_factory=tuple)
    read_error: "UserFriendlyError | None" = None  # Set when the source failed mid-read

    @property
    def complete(self) -> bool:
        return self.read_error is None
