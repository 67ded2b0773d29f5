"""Integration tests for the composition root.

These tests verify that configuration is loaded and validated, that
build_service wires the filesystem adapter and audit manager together,
and that the command-line entry point runs commands end to end.
"""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from auditlog.adapters.storage.filesystem import FilesystemStorageAdapter
from auditlog.config import load_settings
from auditlog.core.audit_manager import AuditManager
from auditlog.main import build_parser, build_service, main, run


@pytest.fixture
def temp_audit_dir() -> Path:
    """Create a temporary directory for audit files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_load_settings_with_defaults(self) -> None:
        """Load settings with default values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()
        assert settings.audit_directory == "./audit"
        assert settings.max_entries_per_file == 100
        assert settings.file_extension == "txt"
        assert settings.create_audit_directory is True
        assert settings.log_level == "INFO"
        assert settings.log_format == "text"

    def test_load_settings_from_env(self) -> None:
        """Load settings from environment variables."""
        with patch.dict(
            os.environ,
            {
                "AUDIT_DIRECTORY": "/tmp/visits",
                "MAX_ENTRIES_PER_FILE": "3",
                "FILE_EXTENSION": ".log",
                "LOG_LEVEL": "DEBUG",
            },
        ):
            settings = load_settings()
            assert settings.audit_directory == "/tmp/visits"
            assert settings.max_entries_per_file == 3
            assert settings.file_extension == "log"
            assert settings.log_level == "DEBUG"

    def test_load_settings_from_env_file(self, temp_audit_dir: Path) -> None:
        """Settings can come from an explicit .env file."""
        env_file = temp_audit_dir / "test.env"
        env_file.write_text("MAX_ENTRIES_PER_FILE=7\n")

        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings(str(env_file))

        assert settings.max_entries_per_file == 7

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_load_settings_validates_max_entries(self, value: str) -> None:
        """File capacity validation rejects zero or negative values."""
        with patch.dict(os.environ, {"MAX_ENTRIES_PER_FILE": value}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    @pytest.mark.parametrize("value", ["", ".", "t/x"])
    def test_load_settings_validates_extension(self, value: str) -> None:
        with patch.dict(os.environ, {"FILE_EXTENSION": value}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_load_settings_validates_log_level(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()


class TestServiceWiring:
    """Test that build_service wires the configured components."""

    def test_build_service(self, temp_audit_dir: Path) -> None:
        with patch.dict(
            os.environ,
            {
                "AUDIT_DIRECTORY": str(temp_audit_dir),
                "MAX_ENTRIES_PER_FILE": "5",
                "FILE_EXTENSION": "log",
            },
        ):
            settings = load_settings()

        service = build_service(settings)

        assert isinstance(service.storage, FilesystemStorageAdapter)
        assert isinstance(service.manager, AuditManager)
        assert service.manager.max_entries_per_file == 5
        assert service.manager.file_extension == "log"
        assert service.directory == str(temp_audit_dir)


class TestEntryPoint:
    """Test the command-line entry point end to end."""

    def test_parser_accepts_add(self) -> None:
        args = build_parser().parse_args(["add", "Alice", "--time", "2019-04-06T18:00:00"])

        assert args.command == "add"
        assert args.visitor_name == "Alice"
        assert args.time_of_visit == "2019-04-06T18:00:00"

    def test_parser_without_command_is_interactive(self) -> None:
        assert build_parser().parse_args([]).command is None

    def test_run_add_then_summary(
        self, temp_audit_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        target = temp_audit_dir / "audit"
        env = {"AUDIT_DIRECTORY": str(target), "MAX_ENTRIES_PER_FILE": "1"}

        with patch.dict(os.environ, env):
            assert run(["add", "Alice", "--time", "2019-04-06T18:00:00"]) == 0
            assert run(["add", "Bob", "--time", "2019-04-06T18:05:00"]) == 0
            capsys.readouterr()
            assert run(["summary"]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["data"]["file_count"] == 2
        assert (target / "audit_2.txt").read_text() == "Bob;2019-04-06T18:05:00"

    def test_run_reports_failure(
        self, temp_audit_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (temp_audit_dir / "notes.txt").write_text("not an audit file")

        with patch.dict(os.environ, {"AUDIT_DIRECTORY": str(temp_audit_dir)}):
            exit_code = run(["add", "Alice", "--time", "2019-04-06T18:00:00"])

        result = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert result["status"] == "error"

    def test_interactive_session(
        self, temp_audit_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        commands = iter(
            [
                'add {"visitor_name": "Alice", "time_of_visit": "2019-04-06T18:00:00"}',
                "summary",
                "exit",
            ]
        )

        with patch.dict(os.environ, {"AUDIT_DIRECTORY": str(temp_audit_dir)}):
            with patch("builtins.input", side_effect=lambda _prompt: next(commands)):
                assert run([]) == 0

        assert (temp_audit_dir / "audit_1.txt").read_text() == "Alice;2019-04-06T18:00:00"
        assert '"record_count": 1' in capsys.readouterr().out

    def test_interactive_session_survives_bad_arguments(
        self, temp_audit_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        commands = iter(
            [
                'add {"visitor_name": 5}',
                'add {"visitor_name": "Alice", "time_of_visit": 123}',
                "add 5",
                'add ["Alice"]',
                'add {"visitor_name": "Bob", "time_of_visit": "2019-04-06T18:00:00"}',
                "exit",
            ]
        )

        with patch.dict(os.environ, {"AUDIT_DIRECTORY": str(temp_audit_dir)}):
            with patch("builtins.input", side_effect=lambda _prompt: next(commands)):
                assert run([]) == 0

        assert (temp_audit_dir / "audit_1.txt").read_text() == "Bob;2019-04-06T18:00:00"
        assert "visitor_name must be a string" in capsys.readouterr().out

    def test_read_commands_do_not_create_directory(
        self, temp_audit_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        target = temp_audit_dir / "audit"

        with patch.dict(os.environ, {"AUDIT_DIRECTORY": str(target)}):
            assert run(["summary"]) == 0
            assert run(["list"]) == 0

        assert not target.exists()

    def test_main_accepts_argv(
        self, temp_audit_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch.dict(os.environ, {"AUDIT_DIRECTORY": str(temp_audit_dir)}):
            with pytest.raises(SystemExit) as exc_info:
                main(["add", "Alice", "--time", "2019-04-06T18:00:00"])

        assert exc_info.value.code == 0
        assert (temp_audit_dir / "audit_1.txt").read_text() == "Alice;2019-04-06T18:00:00"

    def test_main_exit_code_on_failure(
        self, temp_audit_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (temp_audit_dir / "notes.txt").write_text("not an audit file")

        with patch.dict(os.environ, {"AUDIT_DIRECTORY": str(temp_audit_dir)}):
            with pytest.raises(SystemExit) as exc_info:
                main(["summary"])

        assert exc_info.value.code == 1
