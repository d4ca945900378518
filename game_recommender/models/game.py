"""Game-related data models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Game:
    """One catalog entry."""
    name: str
    platform: str
    release_date: date
    summary: str
    meta_score: int  # Usually 0-100, not clamped
    user_review: float  # Usually 0-10, not clamped

    @property
    def release_year(self) -> int:
        return self.release_date.year
