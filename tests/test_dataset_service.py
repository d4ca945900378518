"""Tests for dataset file access."""

from pathlib import Path
from unittest.mock import patch

import pytest

from game_recommender.services import DatasetFileService, FileSystemError


class TestDatasetFileService:
    """Tests for DatasetFileService."""

    @pytest.fixture
    def service(self) -> DatasetFileService:
        return DatasetFileService()

    def test_read_lines(self, service: DatasetFileService, tmp_path: Path) -> None:
        path = tmp_path / "games.csv"
        path.write_text("header\nfirst\nsecond\n", encoding="utf-8")

        assert list(service.read_lines(path)) == ["header\n", "first\n", "second\n"]

    def test_read_lines_keeps_crlf(self, service: DatasetFileService, tmp_path: Path) -> None:
        path = tmp_path / "games.csv"
        path.write_bytes(b"header\r\nfirst")

        assert list(service.read_lines(path)) == ["header\r\n", "first"]

    def test_read_lines_uses_encoding(self, tmp_path: Path) -> None:
        path = tmp_path / "games.csv"
        path.write_bytes("Pokémon Snap".encode("latin-1"))

        assert list(DatasetFileService(encoding="latin-1").read_lines(path)) == ["Pokémon Snap"]

    def test_missing_file_raises_on_call(self, service: DatasetFileService, tmp_path: Path) -> None:
        path = tmp_path / "missing.csv"

        with patch("game_recommender.services.dataset.log") as mock_logger:
            with pytest.raises(FileSystemError) as exc_info:
                service.read_lines(path)

        assert isinstance(exc_info.value.original_error, FileNotFoundError)
        assert exc_info.value.path == str(path)
        assert mock_logger.error.called

    def test_directory_raises(self, service: DatasetFileService, tmp_path: Path) -> None:
        with pytest.raises(FileSystemError):
            service.read_lines(tmp_path)

    def test_exists(self, service: DatasetFileService, tmp_path: Path) -> None:
        path = tmp_path / "games.csv"
        assert not service.exists(path)

        path.write_text("header\n", encoding="utf-8")

        assert service.exists(path)
        assert not service.exists(tmp_path)
