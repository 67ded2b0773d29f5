"""Audit service: implements AuditPort for recording visits.

This is the core service that sequences one operation: read the
location through the storage port, let the AuditManager decide, and
hand the decision back to the storage port. It holds no state between
calls; everything lives in storage.
"""

import logging
from datetime import datetime

from .audit_manager import AuditManager
from .models import AuditSummary, FileUpdate, LogFileIntegrityError, VisitRecord
from .ports import AuditPort, AuditStoragePort

logger = logging.getLogger(__name__)


class AuditService(AuditPort):
    """Core implementation of AuditPort.

    Coordinates the storage port and the audit manager for a single
    storage location. Calls on the same location must be serialized by
    the caller: two concurrent add_record calls can both pick the same
    current file and the second write wins.
    """

    def __init__(
        self,
        storage: AuditStoragePort,
        manager: AuditManager,
        directory: str,
    ):
        """Initialize the audit service.

        Args:
            storage: AuditStoragePort implementation for reading and writing.
            manager: AuditManager holding the rotation rules.
            directory: Storage location the audit files live in.
        """
        self.storage = storage
        self.manager = manager
        self.directory = directory

    def add_record(self, visitor_name: str, time_of_visit: datetime) -> FileUpdate:
        """Append a visitor record, rotating to a new file when full.

        Args:
            visitor_name: Name of the visitor.
            time_of_visit: When the visit happened.

        Returns:
            The FileUpdate that was applied.

        Raises:
            ValueError: If the record is invalid or stored file names
                are inconsistent. Nothing is written in that case.
            OSError: If reading or writing storage fails.
        """
        record = VisitRecord(visitor_name=visitor_name, time_of_visit=time_of_visit)

        try:
            snapshot = self.storage.read_directory(self.directory)
        except (OSError, ValueError) as e:
            logger.error(
                f"Failed to read audit directory {self.directory}: {e}",
                extra={"directory": self.directory},
            )
            raise

        try:
            update = self.manager.add_record(snapshot.files, record)
        except LogFileIntegrityError as e:
            logger.error(
                f"Refusing to write to inconsistent audit directory {self.directory}: {e}",
                extra={"directory": self.directory},
            )
            raise

        try:
            self.storage.apply_update(self.directory, update)
        except (OSError, ValueError) as e:
            logger.error(
                f"Failed to write audit file {update.file_name}: {e}",
                extra={"directory": self.directory, "file_name": update.file_name},
            )
            raise

        logger.info(
            f"Recorded visit of {visitor_name} in {update.file_name}",
            extra={
                "directory": self.directory,
                "file_name": update.file_name,
                "rotated": update.file_name not in snapshot.file_names,
            },
        )
        return update

    def list_records(self) -> list[VisitRecord]:
        """Return every stored record in write order."""
        snapshot = self.storage.read_directory(self.directory)
        return self.manager.read_records(snapshot.files)

    def get_summary(self) -> AuditSummary:
        """Return file and record counts for the location."""
        snapshot = self.storage.read_directory(self.directory)
        return self.manager.summarize(snapshot.files)
