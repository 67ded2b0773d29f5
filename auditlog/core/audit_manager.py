"""Rotation rules for visitor audit files.

This module implements the decision of which file a new record goes to
and what that file must contain afterwards. It never touches storage:
the caller hands in the files it read and applies the returned update.
"""

import re
from collections.abc import Sequence

from .models import (
    DEFAULT_FILE_EXTENSION,
    FILE_NAME_PREFIX,
    LINE_SEPARATOR,
    AuditSummary,
    DuplicateLogFileIndexError,
    FileContent,
    FileUpdate,
    InvalidLogFileNameError,
    VisitRecord,
)


class AuditManager:
    """Decides where a visitor record is written.

    Pure decision logic, no side effects.
    """

    def __init__(
        self,
        max_entries_per_file: int,
        file_extension: str = DEFAULT_FILE_EXTENSION,
    ):
        if max_entries_per_file < 1:
            raise ValueError(
                f"max_entries_per_file must be positive, got {max_entries_per_file}"
            )
        extension = file_extension.lstrip(".")
        if not extension:
            raise ValueError("file_extension must be a non-empty string")
        self.max_entries_per_file = max_entries_per_file
        self.file_extension = extension
        self._name_pattern = re.compile(
            rf"{re.escape(FILE_NAME_PREFIX)}([0-9]+)\.{re.escape(extension)}"
        )

    def add_record(
        self, files: Sequence[FileContent], record: VisitRecord
    ) -> FileUpdate:
        """Decide which file receives the record and its new content.

        The highest-index file is the current one. It is rewritten with
        the record appended while it holds fewer than
        max_entries_per_file lines; otherwise a file with the next index
        is started.

        Args:
            files: Every audit file currently in the location.
            record: The record to add.

        Returns:
            FileUpdate naming the target file and its full new content.

        Raises:
            InvalidLogFileNameError: If a file name cannot be parsed.
            DuplicateLogFileIndexError: If two files share an index.
        """
        sorted_files = self.sort_by_index(files)
        new_record = record.serialize()

        if not sorted_files:
            return FileUpdate(self.file_name_for(1), new_record)

        current_index, current_file = sorted_files[-1]
        lines = list(current_file.lines)

        if len(lines) < self.max_entries_per_file:
            lines.append(new_record)
            new_content = LINE_SEPARATOR.join(lines)
            return FileUpdate(current_file.file_name, new_content)

        return FileUpdate(self.file_name_for(current_index + 1), new_record)

    def read_records(self, files: Sequence[FileContent]) -> list[VisitRecord]:
        """Return every stored record in write order.

        Files are visited by ascending index, lines in file order.
        Blank lines are skipped.
        """
        return [
            VisitRecord.parse(line)
            for _, file in self.sort_by_index(files)
            for line in file.lines
            if line.strip()
        ]

    def summarize(self, files: Sequence[FileContent]) -> AuditSummary:
        """Summarize the file set without reading anything else."""
        sorted_files = self.sort_by_index(files)
        record_count = sum(len(file.lines) for _, file in sorted_files)

        if not sorted_files:
            return AuditSummary(
                file_count=0,
                record_count=0,
                current_file=None,
                current_file_entries=0,
                max_entries_per_file=self.max_entries_per_file,
            )

        _, current_file = sorted_files[-1]
        return AuditSummary(
            file_count=len(sorted_files),
            record_count=record_count,
            current_file=current_file.file_name,
            current_file_entries=len(current_file.lines),
            max_entries_per_file=self.max_entries_per_file,
        )

    def sort_by_index(
        self, files: Sequence[FileContent]
    ) -> list[tuple[int, FileContent]]:
        """Pair each file with its index and sort ascending.

        Raises:
            InvalidLogFileNameError: If a file name cannot be parsed.
            DuplicateLogFileIndexError: If two files share an index.
        """
        indexed = sorted(
            ((self.get_index(file.file_name), file) for file in files),
            key=lambda pair: pair[0],
        )
        for (index, previous), (next_index, current) in zip(indexed, indexed[1:]):
            if index == next_index:
                raise DuplicateLogFileIndexError(
                    f"Files {previous.file_name!r} and {current.file_name!r} "
                    f"share index {index}"
                )
        return indexed

    def get_index(self, file_name: str) -> int:
        """Extract the numeric index from a name like ``audit_1.txt``.

        Raises:
            InvalidLogFileNameError: If the name does not match the pattern
                or the index is not a positive integer.
        """
        match = self._name_pattern.fullmatch(file_name)
        if match is None:
            raise InvalidLogFileNameError(
                f"Unexpected audit file name {file_name!r}, expected "
                f"{FILE_NAME_PREFIX}<N>.{self.file_extension}"
            )
        index = int(match.group(1))
        if index < 1:
            raise InvalidLogFileNameError(
                f"Audit file index must be positive, got {index} in {file_name!r}"
            )
        return index

    def file_name_for(self, index: int) -> str:
        """Build the file name for a given index."""
        return f"{FILE_NAME_PREFIX}{index}.{self.file_extension}"
