"""Domain models for the audit log.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass
from datetime import datetime

# Records inside a file are joined with CRLF regardless of platform.
LINE_SEPARATOR = "\r\n"
# Sortable ISO-8601: seconds precision, no fraction, no offset.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
FILE_NAME_PREFIX = "audit_"
DEFAULT_FILE_EXTENSION = "txt"
FIELD_SEPARATOR = ";"


def split_lines(text: str) -> tuple[str, ...]:
    """Split file text into lines on CRLF, LF and CR only.

    Other characters str.splitlines() treats as breaks (form feed,
    U+2028 and so on) stay inside the line. A trailing separator does
    not produce an empty last line.
    """
    if not text:
        return ()
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(lines)


class LogFileIntegrityError(ValueError):
    """Storage holds a file set the decision engine cannot reason about."""


class InvalidLogFileNameError(LogFileIntegrityError):
    """A file name does not follow the ``audit_<N>.<ext>`` pattern."""


class DuplicateLogFileIndexError(LogFileIntegrityError):
    """Two files in the same location resolve to the same index."""


@dataclass(frozen=True)
class VisitRecord:
    """A single visitor entry.

    Serialized as ``<visitor_name>;<timestamp>``. Semicolons inside the
    name are not escaped; the timestamp never contains one, so parsing
    splits on the last separator.
    """

    visitor_name: str
    time_of_visit: datetime

    def __post_init__(self) -> None:
        """Validate record invariants on creation."""
        if not self.visitor_name or not self.visitor_name.strip():
            raise ValueError("visitor_name must be a non-empty string")
        # A line break would split one record across two lines.
        if "\n" in self.visitor_name or "\r" in self.visitor_name:
            raise ValueError("visitor_name must not contain line breaks")

    def serialize(self) -> str:
        """Render the record as one line of an audit file."""
        timestamp = self.time_of_visit.strftime(TIMESTAMP_FORMAT)
        return f"{self.visitor_name}{FIELD_SEPARATOR}{timestamp}"

    @classmethod
    def parse(cls, line: str) -> "VisitRecord":
        """Rebuild a record from a line produced by serialize().

        Raises:
            ValueError: If the line has no separator or the timestamp
                is not ISO-8601.
        """
        name, sep, timestamp = line.rpartition(FIELD_SEPARATOR)
        if not sep:
            raise ValueError(f"Malformed audit record: {line!r}")
        try:
            time_of_visit = datetime.fromisoformat(timestamp.strip())
        except ValueError as e:
            raise ValueError(f"Malformed timestamp in audit record {line!r}: {e}") from e
        return cls(visitor_name=name.strip(), time_of_visit=time_of_visit)


@dataclass(frozen=True)
class FileContent:
    """The current state of one audit file, as read from storage."""

    file_name: str
    lines: tuple[str, ...]  # immutable for frozen dataclass

    def __post_init__(self) -> None:
        """Convert a lines list to a tuple."""
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))


@dataclass(frozen=True)
class FileSnapshot:
    """Every audit file of a location, read at the start of one operation."""

    directory: str
    files: tuple[FileContent, ...]  # immutable for frozen dataclass

    def __post_init__(self) -> None:
        """Convert a files list to a tuple."""
        if not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(self.files))

    @property
    def file_names(self) -> list[str]:
        """Names of the files in the snapshot, in read order."""
        return [file.file_name for file in self.files]


@dataclass(frozen=True)
class FileUpdate:
    """Decision returned by the audit manager.

    Names the file to write and its complete new content. The content
    replaces whatever the file held before; it is never a delta.
    """

    file_name: str
    new_content: str


@dataclass(frozen=True)
class AuditSummary:
    """Statistics about the audit files of a location."""

    file_count: int
    record_count: int
    current_file: str | None  # None if no files exist yet
    current_file_entries: int
    max_entries_per_file: int

    @property
    def current_file_is_full(self) -> bool:
        """Whether the next record will rotate into a new file."""
        return (
            self.current_file is not None
            and self.current_file_entries >= self.max_entries_per_file
        )
