"""Unit tests for format dispatch and single-file import."""

from pathlib import Path
from typing import Union

import pytest

from calendarhub.importer.constants import (
    FILE_READ_ERROR_MESSAGE,
    JSON_PARSE_ERROR,
    UNSUPPORTED_FORMAT_MESSAGE,
)
from calendarhub.importer.csv_parser import parse_csv_file
from calendarhub.importer.dispatcher import (
    detect_parser,
    import_calendar_file,
    parse_calendar_content,
)
from calendarhub.importer.exceptions import FileReadError
from calendarhub.importer.files import CalendarFile, InMemoryFile, LocalFile, decode_content
from calendarhub.importer.ics_parser import parse_ics_file
from calendarhub.importer.json_parser import parse_json_file
from calendarhub.sources.models import CalendarSource
from tests.fixtures.mock_import_data import ImportDataFactory


class FailingFile:
    """File handle whose read always fails."""

    def __init__(self, name: str, error: Exception) -> None:
        self.name = name
        self.error = error
        self.read_called = False

    async def read(self) -> Union[bytes, str]:
        self.read_called = True
        raise self.error


@pytest.mark.unit
class TestDetectParser:
    """Extension-based parser selection."""

    @pytest.mark.parametrize(
        ("file_name", "parser"),
        [
            ("work.ics", parse_ics_file),
            ("WORK.ICS", parse_ics_file),
            ("export.Csv", parse_csv_file),
            ("data.JSON", parse_json_file),
            ("archive.2024.json", parse_json_file),
        ],
    )
    def test_known_extensions(self, file_name: str, parser: object) -> None:
        assert detect_parser(file_name) is parser

    @pytest.mark.parametrize("file_name", ["notes.txt", "calendar.ics.bak", "ics", "", "data.xml"])
    def test_unknown_extensions(self, file_name: str) -> None:
        assert detect_parser(file_name) is None


@pytest.mark.unit
@pytest.mark.critical_path
class TestParseCalendarContent:
    """Synchronous routing of decoded content."""

    @pytest.mark.parametrize("file_name", ["notes.txt", "photo.PNG", "calendar"])
    def test_unsupported_format(self, local_source: CalendarSource, file_name: str) -> None:
        result = parse_calendar_content(file_name, "BEGIN:VEVENT", local_source)

        assert result.success is False
        assert result.events == []
        assert result.errors == [UNSUPPORTED_FORMAT_MESSAGE]
        assert result.file_name == file_name

    @pytest.mark.parametrize(
        ("file_name", "content"),
        [
            ("team.ics", ImportDataFactory.sample_ics(2)),
            ("team.csv", ImportDataFactory.sample_csv(2)),
            ("team.json", ImportDataFactory.sample_json(2)),
        ],
    )
    def test_real_file_name_replaces_placeholder(
        self, local_source: CalendarSource, file_name: str, content: str
    ) -> None:
        result = parse_calendar_content(file_name, content, local_source)

        assert result.success is True
        assert result.event_count == 2
        assert result.file_name == file_name

    def test_failure_keeps_real_file_name(self, local_source: CalendarSource) -> None:
        result = parse_calendar_content("broken.csv", "Title,Start", local_source)

        assert result.success is False
        assert result.file_name == "broken.csv"


@pytest.mark.unit
class TestCalendarFiles:
    """File handle implementations."""

    def test_implementations_satisfy_protocol(self, tmp_path: Path) -> None:
        assert isinstance(InMemoryFile("a.ics", b""), CalendarFile)
        assert isinstance(LocalFile(tmp_path / "a.ics"), CalendarFile)

    def test_decode_content_strips_bom(self) -> None:
        assert decode_content("\ufeffTitle".encode("utf-8")) == "Title"

    def test_decode_content_passes_text_through(self) -> None:
        assert decode_content("already text") == "already text"

    def test_decode_content_rejects_invalid_utf8(self) -> None:
        with pytest.raises(UnicodeDecodeError):
            decode_content(b"\xff\xfe\x00bad")

    @pytest.mark.asyncio
    async def test_local_file_reads_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text("[]", encoding="utf-8")

        file = LocalFile(path)

        assert file.name == "events.json"
        assert await file.read() == b"[]"


@pytest.mark.unit
@pytest.mark.critical_path
class TestImportCalendarFile:
    """Async single-file import."""

    @pytest.mark.asyncio
    async def test_imports_in_memory_file(self, local_source: CalendarSource) -> None:
        file = InMemoryFile("week.ics", ImportDataFactory.sample_ics(3).encode("utf-8"))

        result = await import_calendar_file(file, local_source)

        assert result.success is True
        assert result.event_count == 3
        assert result.file_name == "week.ics"

    @pytest.mark.asyncio
    async def test_unsupported_file_is_not_read(self, local_source: CalendarSource) -> None:
        file = FailingFile("notes.txt", OSError("should not be read"))

        result = await import_calendar_file(file, local_source)

        assert file.read_called is False
        assert result.errors == [UNSUPPORTED_FORMAT_MESSAGE]
        assert result.file_name == "notes.txt"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [OSError("disk gone"), FileReadError("truncated upload")],
    )
    async def test_read_errors_become_results(
        self, local_source: CalendarSource, error: Exception
    ) -> None:
        file = FailingFile("week.ics", error)

        result = await import_calendar_file(file, local_source)

        assert result.success is False
        assert result.events == []
        assert result.errors == [FILE_READ_ERROR_MESSAGE]
        assert result.file_name == "week.ics"

    @pytest.mark.asyncio
    async def test_undecodable_bytes_become_result(self, local_source: CalendarSource) -> None:
        file = InMemoryFile("latin.csv", "Title,Start\nCafé,2025-01-15".encode("latin-1"))

        result = await import_calendar_file(file, local_source)

        assert result.success is False
        assert result.errors == [FILE_READ_ERROR_MESSAGE]

    @pytest.mark.asyncio
    async def test_missing_local_file(self, tmp_path: Path, local_source: CalendarSource) -> None:
        result = await import_calendar_file(LocalFile(tmp_path / "missing.json"), local_source)

        assert result.success is False
        assert result.errors == [FILE_READ_ERROR_MESSAGE]
        assert result.file_name == "missing.json"

    @pytest.mark.asyncio
    async def test_undecodable_json_becomes_result(self, local_source: CalendarSource) -> None:
        file = InMemoryFile("deep.json", "[" * 100000 + "]" * 100000)

        result = await import_calendar_file(file, local_source)

        assert result.success is False
        assert result.events == []
        assert len(result.errors) == 1
        assert result.errors[0].startswith(f"{JSON_PARSE_ERROR}: ")
        assert result.file_name == "deep.json"
