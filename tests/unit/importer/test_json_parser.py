"""Unit tests for the JSON importer."""

import json
import sys
from datetime import datetime

import pytest

from calendarhub.importer.constants import JSON_DEFAULT_FILE_NAME, JSON_PARSE_ERROR
from calendarhub.importer.json_parser import (
    JSONImportParser,
    extract_records,
    parse_json_file,
    resolve_field,
)
from calendarhub.sources.models import CalendarSource
from tests.fixtures.mock_import_data import ImportDataFactory


@pytest.mark.unit
class TestFieldResolution:
    """Alternate key names per logical field."""

    def test_title_prefers_title_over_summary(self) -> None:
        assert resolve_field({"title": "A", "summary": "B"}, "title") == "A"

    def test_empty_title_falls_back_to_summary(self) -> None:
        assert resolve_field({"title": "", "summary": "B"}, "title") == "B"

    def test_start_prefers_start_date(self) -> None:
        record = {"startDate": "2025-01-01", "start": "2025-02-02"}

        assert resolve_field(record, "start") == "2025-01-01"

    def test_missing_field(self) -> None:
        assert resolve_field({}, "end") is None

    def test_extract_records_from_array(self) -> None:
        assert extract_records([{"a": 1}]) == [{"a": 1}]

    def test_extract_records_from_events_field(self) -> None:
        assert extract_records({"events": [{"a": 1}], "other": 2}) == [{"a": 1}]

    @pytest.mark.parametrize("data", [{}, {"calendar": []}, {"events": "nope"}, "text", 42, None])
    def test_extract_records_without_records(self, data: object) -> None:
        assert extract_records(data) == []


@pytest.mark.unit
@pytest.mark.critical_path
class TestJSONImportParser:
    """Record mapping and per-record error isolation."""

    def test_summary_and_start_without_end(self, local_source: CalendarSource) -> None:
        """With no end key the end date equals the start date."""
        content = json.dumps({"events": [{"summary": "X", "start": "2025-02-01T09:00:00"}]})

        result = parse_json_file(content, local_source)

        assert result.success is True
        assert result.errors == []
        assert len(result.events) == 1
        event = result.events[0]
        assert event.title == "X"
        assert event.start_date == datetime(2025, 2, 1, 9, 0)
        assert event.end_date == event.start_date

    def test_full_record(self, local_source: CalendarSource) -> None:
        content = ImportDataFactory.json_events(
            [
                {
                    "title": "Offsite",
                    "description": "Planning",
                    "startDate": "2025-03-10",
                    "endDate": "2025-03-12",
                    "allDay": True,
                }
            ]
        )

        event = parse_json_file(content, local_source).events[0]

        assert event.title == "Offsite"
        assert event.description == "Planning"
        assert event.start_date == datetime(2025, 3, 10)
        assert event.end_date == datetime(2025, 3, 12)
        assert event.all_day is True
        assert event.source == local_source
        assert event.color == local_source.color

    def test_epoch_milliseconds(self, local_source: CalendarSource) -> None:
        content = ImportDataFactory.json_events(
            [{"title": "Epoch", "start": 1736935200000, "end": 1736938800000}]
        )

        event = parse_json_file(content, local_source).events[0]

        assert event.start_date == datetime.fromtimestamp(1736935200)
        assert event.end_date == datetime.fromtimestamp(1736938800)

    def test_empty_array_is_not_an_error(self, local_source: CalendarSource) -> None:
        result = parse_json_file("[]", local_source)

        assert result.success is False
        assert result.events == []
        assert result.errors == []

    def test_object_without_events_is_not_an_error(self, local_source: CalendarSource) -> None:
        result = parse_json_file('{"version": 1}', local_source)

        assert result.success is False
        assert result.errors == []

    def test_invalid_json(self, local_source: CalendarSource) -> None:
        result = parse_json_file("{not json", local_source)

        assert result.success is False
        assert result.events == []
        assert len(result.errors) == 1
        assert result.errors[0].startswith(f"{JSON_PARSE_ERROR}: ")
        assert result.file_name == JSON_DEFAULT_FILE_NAME

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"), reason="no integer string limit"
    )
    def test_oversized_integer_literal(self, local_source: CalendarSource) -> None:
        result = parse_json_file("1" * 5000, local_source)

        assert result.success is False
        assert result.events == []
        assert len(result.errors) == 1
        assert result.errors[0].startswith(f"{JSON_PARSE_ERROR}: ")

    def test_deeply_nested_arrays(self, local_source: CalendarSource) -> None:
        result = parse_json_file("[" * 100000 + "]" * 100000, local_source)

        assert result.success is False
        assert result.events == []
        assert len(result.errors) == 1
        assert result.errors[0].startswith(f"{JSON_PARSE_ERROR}: ")

    @pytest.mark.parametrize("value", ["09:30", "March", "2025-03"])
    def test_partial_start_date_is_an_error(
        self, local_source: CalendarSource, value: str
    ) -> None:
        content = ImportDataFactory.json_events([{"title": "Partial", "start": value}])

        result = parse_json_file(content, local_source)

        assert result.success is False
        assert result.errors == [f"Event 1: Invalid start date: {value!r}"]

    def test_time_only_end_is_an_error(self, local_source: CalendarSource) -> None:
        content = ImportDataFactory.json_events(
            [{"title": "Partial", "start": "2025-01-15T09:00:00", "end": "10:00"}]
        )

        result = parse_json_file(content, local_source)

        assert result.events == []
        assert result.errors == ["Event 1: Invalid end date: '10:00'"]

    def test_missing_title_is_dropped_silently(self, local_source: CalendarSource) -> None:
        content = ImportDataFactory.json_events(
            [
                {"start": "2025-01-01T10:00:00"},
                {"title": "", "summary": "", "start": "2025-01-01T10:00:00"},
                {"title": "Kept", "start": "2025-01-01T10:00:00"},
            ]
        )

        result = parse_json_file(content, local_source)

        assert [event.title for event in result.events] == ["Kept"]
        assert result.errors == []

    def test_bad_records_are_reported_with_position(self, local_source: CalendarSource) -> None:
        content = ImportDataFactory.json_events(
            [
                {"title": "Good", "start": "2025-01-01T10:00:00"},
                {"title": "No start"},
                {"title": "Bad start", "start": "someday"},
                {"title": "Bad end", "start": "2025-01-01T10:00:00", "end": "later"},
                "not an object",
                {"title": "Also good", "startDate": "2025-01-02T10:00:00"},
            ]
        )

        result = parse_json_file(content, local_source, "events.json")

        assert result.success is True
        assert [event.title for event in result.events] == ["Good", "Also good"]
        assert len(result.errors) == 4
        assert [error.split(":")[0] for error in result.errors] == [
            "Event 2",
            "Event 3",
            "Event 4",
            "Event 5",
        ]
        assert "missing start date" in result.errors[0]

    def test_only_bad_records(self, local_source: CalendarSource) -> None:
        result = parse_json_file('[{"title": "Broken"}]', local_source)

        assert result.success is False
        assert result.events == []
        assert len(result.errors) == 1

    def test_wrapped_and_bare_arrays_match(self, local_source: CalendarSource) -> None:
        parser = JSONImportParser(local_source)

        wrapped = parser.parse(ImportDataFactory.sample_json(3, wrapped=True))
        bare = parser.parse(ImportDataFactory.sample_json(3, wrapped=False))

        assert [e.title for e in wrapped.events] == [e.title for e in bare.events]
        assert {e.id for e in wrapped.events}.isdisjoint({e.id for e in bare.events})
