"""Read-only query engine over a fixed game catalog.

The catalog is built once from raw dataset lines. Every query afterwards is
a pure scan over the same immutable tuple, so a recommender can be shared
between threads once construction has finished.
"""

from collections.abc import Iterable
from contextlib import closing, nullcontext
from datetime import date
from pathlib import Path

import structlog

from ..models import CatalogConfig, Game, KeywordSearchResult, LoadReport, QueryStatus, YearsActiveResult
from .dataset import DatasetFileService
from .errors import (
    ConfigurationError,
    GameNotFoundError,
    InvalidArgumentError,
    InvalidGameDataError,
    MalformedLineError,
    handle_error,
)
from .parser import GameLineParser

log = structlog.stdlib.get_logger()


class GameRecommender:
    """Filtering, ranking, grouping and search over a static game catalog."""

    def __init__(self, lines: Iterable[str], parser: GameLineParser | None = None) -> None:
        """Load the catalog from ``lines``.

        The first line is a header and is always discarded. Lines with the
        wrong number of fields are skipped. A line with an unparseable date or
        score aborts loading. A read failure on the source stops loading and
        keeps what was parsed so far; it is reported in ``load_report``.

        Args:
            lines: Raw dataset lines, header first
            parser: Line parser (defaults to the comma-separated format)

        Raises:
            InvalidGameDataError: If a line holds invalid content
        """
        self._parser = parser or GameLineParser()
        self._games, self._load_report = self._load(lines)

        log.info(
            "Game catalog loaded",
            games=self._load_report.games_loaded,
            skipped=len(self._load_report.skipped_lines),
            complete=self._load_report.complete,
        )

    @classmethod
    def from_path(cls, path: Path, config: CatalogConfig | None = None) -> "GameRecommender":
        """Build a recommender from a dataset file on disk.

        Raises:
            FileSystemError: If the file cannot be opened
            InvalidGameDataError: If a line holds invalid content
        """
        config = config or CatalogConfig()
        lines = DatasetFileService(encoding=config.encoding).read_lines(path)
        return cls(lines, parser=GameLineParser(config))

    @classmethod
    def from_config(cls, config: CatalogConfig) -> "GameRecommender":
        """Build a recommender from the dataset named in ``config``.

        Raises:
            ConfigurationError: If ``config`` has no dataset path
        """
        if config.dataset_path is None:
            raise ConfigurationError(
                "No dataset configured",
                setting="dataset_path",
                expected="absolute path to a dataset file",
            )
        return cls.from_path(config.dataset_path, config)

    def _load(self, lines: Iterable[str]) -> tuple[tuple[Game, ...], LoadReport]:
        games: list[Game] = []
        skipped: list[int] = []
        lines_read = 0
        read_error = None
        skip_header = self._parser.config.has_header

        source = closing(lines) if hasattr(lines, "close") else nullcontext(lines)

        try:
            with source:
                for line_number, line in enumerate(lines, start=1):
                    lines_read = line_number
                    if skip_header and line_number == 1:
                        continue

                    try:
                        games.append(self._parser.parse(line))
                    except MalformedLineError as e:
                        skipped.append(line_number)
                        log.debug("Skipping malformed line", line_number=line_number, fields=e.field_count)
                    except InvalidGameDataError as e:
                        log.error(
                            "Invalid game data, aborting load",
                            line_number=line_number,
                            field=e.field,
                            value=e.value,
                        )
                        raise e.at_line(line_number) from e

        except (OSError, UnicodeDecodeError) as e:
            read_error = handle_error(
                e,
                operation="load_catalog",
                component="GameRecommender",
                context={"lines_read": lines_read},
            )

        report = LoadReport(
            lines_read=lines_read,
            games_loaded=len(games),
            skipped_lines=tuple(skipped),
            read_error=read_error,
        )
        return tuple(games), report

    @property
    def load_report(self) -> LoadReport:
        return self._load_report

    def __len__(self) -> int:
        return len(self._games)

    def get_all_games(self) -> tuple[Game, ...]:
        """Return every game in load order."""
        return self._games

    def get_games_released_after(self, release_date: date) -> tuple[Game, ...]:
        """Return the games released strictly after ``release_date``."""
        return tuple(game for game in self._games if game.release_date > release_date)

    def get_top_n_user_rated_games(self, n: int) -> tuple[Game, ...]:
        """Return up to ``n`` games ordered by user review, best first.

        Games with equal reviews keep their load order.

        Raises:
            InvalidArgumentError: If ``n`` is not positive
        """
        if n <= 0:
            raise InvalidArgumentError(f"n must be positive, got {n}", argument="n", value=n)

        ranked = sorted(self._games, key=lambda game: game.user_review, reverse=True)
        return tuple(ranked[:n])

    def get_years_with_top_scoring_games(self, minimal_score: int) -> frozenset[int]:
        """Return the years with at least one game scoring ``minimal_score`` or more."""
        return frozenset(game.release_year for game in self._games if game.meta_score >= minimal_score)

    def get_all_names_of_games_released_in(self, year: int) -> str:
        """Return the names of games released in ``year`` joined by ", "."""
        return ", ".join(game.name for game in self._games if game.release_year == year)

    def get_highest_user_rated_game_by_platform(self, platform: str | None) -> Game:
        """Return the best user-reviewed game for ``platform``.

        On a tie the game loaded first wins.

        Raises:
            GameNotFoundError: If ``platform`` is empty or has no games
        """
        if not platform:
            raise GameNotFoundError("Platform must not be empty", platform=platform)

        candidates = [game for game in self._games if game.platform == platform]
        if not candidates:
            raise GameNotFoundError(f"No games found for platform '{platform}'", platform=platform)

        # max() keeps the first of several equal maxima
        return max(candidates, key=lambda game: game.user_review)

    def get_all_games_by_platform(self) -> dict[str, frozenset[Game]]:
        """Group every game by its platform."""
        grouped: dict[str, set[Game]] = {}
        for game in self._games:
            grouped.setdefault(game.platform, set()).add(game)
        return {platform: frozenset(games) for platform, games in grouped.items()}

    def get_years_active(self, platform: str | None) -> YearsActiveResult:
        """Return how many years ``platform`` has been live.

        The span runs from the release year of its oldest game to that of its
        newest. A platform whose games all came out in one year counts as one
        year. Blank and unknown platforms yield 0 years with a non-OK status.
        """
        if platform is None or not platform.strip():
            return YearsActiveResult(platform=platform, years=0, status=QueryStatus.INVALID_INPUT)

        years = [game.release_year for game in self._games if game.platform == platform]
        if not years:
            return YearsActiveResult(platform=platform, years=0, status=QueryStatus.UNKNOWN_PLATFORM)

        start_year, end_year = min(years), max(years)
        if start_year == end_year:
            return YearsActiveResult(platform=platform, years=1)
        return YearsActiveResult(platform=platform, years=end_year - start_year)

    def get_games_similar_to(self, *keywords: str | None) -> KeywordSearchResult:
        """Return the games whose summary contains every keyword.

        Matching is case-sensitive substring containment, so "boy" also
        matches "boycott". With no keywords, or any None or blank keyword,
        the search is rejected instead of run.
        """
        if not keywords:
            return KeywordSearchResult(status=QueryStatus.INVALID_INPUT, reason="No keywords given")

        for position, keyword in enumerate(keywords):
            if keyword is None or not keyword.strip():
                return KeywordSearchResult(
                    status=QueryStatus.INVALID_INPUT,
                    reason=f"Keyword at position {position} is blank",
                )

        matches = tuple(
            game for game in self._games
            if all(keyword in game.summary for keyword in keywords)
        )
        return KeywordSearchResult(status=QueryStatus.OK, games=matches)
