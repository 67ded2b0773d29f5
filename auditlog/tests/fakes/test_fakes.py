"""Unit tests for fake adapter implementations.

These tests verify that fake adapters work correctly as test doubles
and can be used confidently in tests of core domain logic.
"""

import pytest

from auditlog.core.models import FileUpdate
from auditlog.tests.fakes import FakeAuditStoragePort


class TestFakeAuditStoragePort:
    """Test FakeAuditStoragePort behavior."""

    def test_read_empty_location(self) -> None:
        """An unknown location reads as an empty snapshot."""
        storage = FakeAuditStoragePort()

        snapshot = storage.read_directory("/audit")

        assert snapshot.files == ()
        assert storage.read_calls == ["/audit"]

    def test_seeded_file_is_split_into_lines(self) -> None:
        """Seeded lines come back as the file's lines."""
        storage = FakeAuditStoragePort()
        storage.add_file("/audit", "audit_1.txt", ["a;2019-01-01T00:00:00", "b;2019-01-01T00:00:01"])

        snapshot = storage.read_directory("/audit")

        assert len(snapshot.files) == 1
        assert snapshot.files[0].file_name == "audit_1.txt"
        assert snapshot.files[0].lines == ("a;2019-01-01T00:00:00", "b;2019-01-01T00:00:01")

    def test_apply_update_overwrites(self) -> None:
        """Applying an update replaces the whole content."""
        storage = FakeAuditStoragePort()
        storage.add_file("/audit", "audit_1.txt", ["old"])

        storage.apply_update("/audit", FileUpdate("audit_1.txt", "new"))

        assert storage.get_content("/audit", "audit_1.txt") == "new"
        assert storage.get_last_update() == FileUpdate("audit_1.txt", "new")

    def test_locations_are_isolated(self) -> None:
        """Files in one location are invisible from another."""
        storage = FakeAuditStoragePort()
        storage.apply_update("/a", FileUpdate("audit_1.txt", "x"))

        assert storage.read_directory("/b").files == ()

    def test_failure_flags(self) -> None:
        """Configured failures raise OSError."""
        storage = FakeAuditStoragePort()
        storage.fail_on_read = True
        with pytest.raises(OSError):
            storage.read_directory("/audit")

        storage.fail_on_read = False
        storage.fail_on_write = True
        with pytest.raises(OSError):
            storage.apply_update("/audit", FileUpdate("audit_1.txt", "x"))
        assert storage.applied_updates == []
