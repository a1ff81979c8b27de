"""Tests for the calendarhub command-line interface."""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from calendarhub.cli import main_entry
from calendarhub.cli.commands import format_result
from calendarhub.cli.parser import create_parser
from calendarhub.importer.constants import UNSUPPORTED_FORMAT_MESSAGE
from calendarhub.models import FileImportResult
from tests.fixtures.mock_import_data import ImportDataFactory


@pytest.fixture
def cli_env(clean_env: Path, monkeypatch: pytest.MonkeyPatch, restore_package_logger: Any) -> Path:
    """Isolated home directory so no user configuration is picked up."""
    monkeypatch.setenv("HOME", str(clean_env))
    return clean_env


@pytest.mark.unit
class TestParser:
    """Argument parsing."""

    def test_import_command(self) -> None:
        args = create_parser().parse_args(["--verbose", "import", "a.ics", "b.csv", "--source", "apple"])

        assert args.command == "import"
        assert args.files == [Path("a.ics"), Path("b.csv")]
        assert args.source == "apple"
        assert args.verbose is True

    def test_serve_command(self) -> None:
        args = create_parser().parse_args(["--log-level", "debug", "serve", "--port", "3000"])

        assert args.command == "serve"
        assert args.port == 3000
        assert args.host is None
        assert args.log_level == "DEBUG"

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_verbose_and_quiet_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["-v", "-q", "serve"])


@pytest.mark.unit
class TestFormatResult:
    """Per-file output blocks."""

    def test_success_with_errors(self) -> None:
        result = FileImportResult(
            success=True, events=[], errors=["Row 3: Invalid start date: 'x'"], file_name="a.csv"
        )

        assert format_result(result) == (
            "✓ a.csv: 0 event(s) imported\n    Row 3: Invalid start date: 'x'"
        )

    def test_failure(self) -> None:
        result = FileImportResult.failure("notes.txt", UNSUPPORTED_FORMAT_MESSAGE)

        assert format_result(result) == (
            f"✗ notes.txt: import failed\n    {UNSUPPORTED_FORMAT_MESSAGE}"
        )


@pytest.mark.unit
class TestImportCommand:
    """``calendarhub import``."""

    @pytest.mark.asyncio
    async def test_import_prints_results(
        self, cli_env: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        ics_file = cli_env / "week.ics"
        ics_file.write_text(ImportDataFactory.sample_ics(2), encoding="utf-8")
        txt_file = cli_env / "notes.txt"
        txt_file.write_text("hello", encoding="utf-8")

        exit_code = await main_entry(["--quiet", "import", str(ics_file), str(txt_file)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "✓ week.ics: 2 event(s) imported" in out
        assert "✗ notes.txt: import failed" in out
        assert "1/2 file(s) imported, 2 event(s) total" in out

    @pytest.mark.asyncio
    async def test_all_failed_exit_code(
        self, cli_env: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        missing = cli_env / "missing.json"

        exit_code = await main_entry(["--quiet", "import", str(missing)])

        assert exit_code == 1
        assert "✗ missing.json" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_config_sources_are_used(
        self, cli_env: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_file = cli_env / "hub.yaml"
        config_file.write_text(
            "sources:\n"
            "  - {id: team, name: Team, type: outlook, color: '#123456'}\n"
            "default_source_id: team\n",
            encoding="utf-8",
        )
        csv_file = cli_env / "rows.csv"
        csv_file.write_text(ImportDataFactory.sample_csv(1), encoding="utf-8")

        with patch("calendarhub.cli.commands.CalendarController") as controller_cls:
            controller = controller_cls.return_value
            controller.import_files = AsyncMock(
                return_value=[FileImportResult(success=True, file_name="rows.csv")]
            )
            controller.state.events = ()

            exit_code = await main_entry(
                ["--quiet", "--config", str(config_file), "import", str(csv_file)]
            )

        assert exit_code == 0
        sources = controller_cls.call_args.args[0]
        assert [source.id for source in sources] == ["team"]
        assert controller.import_files.await_args.args[1] == "team"

    @pytest.mark.asyncio
    async def test_missing_config_file(self, cli_env: Path) -> None:
        with pytest.raises(SystemExit):
            await main_entry(["--config", str(cli_env / "nope.yaml"), "import", "a.ics"])

    @pytest.mark.asyncio
    async def test_invalid_config(self, cli_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_file = cli_env / "bad.yaml"
        config_file.write_text("sources:\n  - {id: x}\n", encoding="utf-8")

        exit_code = await main_entry(["--config", str(config_file), "import", "a.ics"])

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().out


@pytest.mark.unit
class TestServeCommand:
    """``calendarhub serve``."""

    @pytest.mark.asyncio
    async def test_serve_applies_overrides(self, cli_env: Path) -> None:
        with patch("calendarhub.cli.commands.serve", new_callable=AsyncMock) as serve_mock:
            exit_code = await main_entry(
                ["--quiet", "serve", "--host", "0.0.0.0", "--port", "9999"]  # nosec: B104
            )

        assert exit_code == 0
        settings = serve_mock.await_args.args[0]
        assert settings.server.host == "0.0.0.0"  # nosec: B104
        assert settings.server.port == 9999
