"""Port interfaces for the audit log.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - AuditStoragePort: Read audit files and apply file updates

2. **Driving Ports** (adapters/external systems call into core)
   - AuditPort: Add visitor records and inspect what is stored
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .models import AuditSummary, FileSnapshot, FileUpdate, VisitRecord


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class AuditStoragePort(ABC):
    """Port for reading and writing audit files in a storage location.

    Adapters implementing this port hold no decision logic: reading
    returns everything that is there, writing applies exactly the
    update it is given.

    Implementations must handle:
    - Empty locations (an empty snapshot, not an error)
    - Full overwrite of the target file on every update
    """

    @abstractmethod
    def read_directory(self, directory: str) -> FileSnapshot:
        """Read every audit file in a location.

        Args:
            directory: Storage location to read.

        Returns:
            FileSnapshot with one FileContent per file. Empty if the
            location holds no files.

        Raises:
            OSError: If the location is missing or unreadable.
        """

    @abstractmethod
    def apply_update(self, directory: str, update: FileUpdate) -> None:
        """Write a file update, replacing any prior content.

        Args:
            directory: Storage location holding the file.
            update: Target file name and its complete new content.

        Raises:
            ValueError: If the file name would resolve outside the location.
            OSError: If the write fails.
        """


# ============================================================================
# DRIVING PORTS (External systems call into core)
# ============================================================================


class AuditPort(ABC):
    """Port for recording visits and inspecting the audit trail.

    Called by the CLI or any other entry point.
    """

    @abstractmethod
    def add_record(self, visitor_name: str, time_of_visit: datetime) -> FileUpdate:
        """Append a visitor record to the current audit file.

        Args:
            visitor_name: Name of the visitor.
            time_of_visit: When the visit happened.

        Returns:
            The FileUpdate that was applied.

        Raises:
            ValueError: If the record is invalid or stored file names
                are inconsistent.
            OSError: If reading or writing storage fails.
        """

    @abstractmethod
    def list_records(self) -> list[VisitRecord]:
        """Return every stored record in write order.

        Raises:
            ValueError: If stored files or lines are malformed.
            OSError: If reading storage fails.
        """

    @abstractmethod
    def get_summary(self) -> AuditSummary:
        """Return file and record counts for the location.

        Raises:
            ValueError: If stored file names are inconsistent.
            OSError: If reading storage fails.
        """
