"""Parsing of delimited dataset lines into Game records."""

import math
from datetime import date, datetime

from ..models import CatalogConfig, Game
from .errors import InvalidGameDataError, MalformedLineError

FIELD_NAMES = ("name", "platform", "release_date", "summary", "meta_score", "user_review")


class GameLineParser:
    """Turns one raw dataset line into a Game.

    Fields are split on a literal delimiter with no quoting support, so a
    summary containing the delimiter changes the field count and the line is
    rejected as malformed. Trailing empty fields are dropped before counting,
    which makes a row with a missing last value malformed as well.
    """

    def __init__(self, config: CatalogConfig | None = None) -> None:
        self.config = config or CatalogConfig()

    def split(self, line: str) -> list[str]:
        """Split a line into fields, raising MalformedLineError on a bad count."""
        fields = line.rstrip("\r\n").split(self.config.delimiter)
        while fields and not fields[-1]:
            fields.pop()

        if len(fields) != len(FIELD_NAMES):
            raise MalformedLineError(
                f"Expected {len(FIELD_NAMES)} fields, got {len(fields)}",
                field_count=len(fields),
                expected=len(FIELD_NAMES),
                line=line,
            )
        return fields

    def parse(self, line: str) -> Game:
        """Parse a line into a Game.

        Raises:
            MalformedLineError: The line has the wrong number of fields
            InvalidGameDataError: A date or score field cannot be parsed
        """
        name, platform, release_text, summary, meta_text, review_text = self.split(line)

        return Game(
            name=name,
            platform=platform,
            release_date=self.parse_date(release_text),
            summary=summary,
            meta_score=self._parse_number(meta_text, int, "meta_score"),
            user_review=self._parse_number(review_text, float, "user_review"),
        )

    def parse_date(self, text: str) -> date:
        """Parse ``text`` strictly with the configured date format.

        ``strptime`` accepts a one-digit day or a lowercase month name, so the
        parsed value must format back to exactly ``text``.
        """
        date_format = self.config.date_format
        try:
            parsed = datetime.strptime(text, date_format)
        except ValueError as e:
            raise InvalidGameDataError(
                f"Release date '{text}' does not match {date_format}",
                field="release_date",
                value=text,
                original_error=e,
            ) from e

        if parsed.strftime(date_format) != text:
            raise InvalidGameDataError(
                f"Release date '{text}' is not written as {parsed.strftime(date_format)}",
                field="release_date",
                value=text,
            )
        return parsed.date()

    @staticmethod
    def _parse_number(text: str, kind: type[int] | type[float], field: str) -> int | float:
        try:
            value = kind(text)
        except ValueError as e:
            raise InvalidGameDataError(
                f"{field} '{text}' is not a valid {kind.__name__}",
                field=field,
                value=text,
                original_error=e,
            ) from e

        if not math.isfinite(value):
            raise InvalidGameDataError(
                f"{field} '{text}' is not a finite number",
                field=field,
                value=text,
            )
        return value
