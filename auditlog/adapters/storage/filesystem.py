"""Filesystem storage adapter.

Implements AuditStoragePort on top of a plain directory: every regular
file in it is an audit file, read whole into lines; every update
overwrites one file with the content it carries.
"""

import logging
from pathlib import Path

from auditlog.core.models import FileContent, FileSnapshot, FileUpdate, split_lines
from auditlog.core.ports import AuditStoragePort

logger = logging.getLogger(__name__)


class FilesystemStorageAdapter(AuditStoragePort):
    """Reads and writes audit files in local directories."""

    def __init__(self, create_missing: bool = False, encoding: str = "utf-8"):
        """Initialize filesystem storage.

        Args:
            create_missing: If True, a missing directory reads as empty
                and is created by the first write instead of raising.
            encoding: Text encoding of the audit files.
        """
        self.create_missing = create_missing
        self.encoding = encoding

    def _resolve_directory(self, directory: str) -> Path:
        """Resolve a storage location.

        Raises:
            ValueError: If the location is a filesystem root.
        """
        path = Path(directory).resolve()
        if path.parent == path:
            raise ValueError(f"Audit directory cannot be a filesystem root: {directory}")
        return path

    def _ensure_directory(self, path: Path) -> None:
        """Create a missing directory if configured to.

        Raises:
            OSError: If the directory cannot be created.
        """
        if not self.create_missing or path.exists():
            return
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OSError(f"Failed to create audit directory {path}: {e}") from e
        logger.info(f"Created audit directory {path}")

    def _resolve_file(self, base_dir: Path, file_name: str) -> Path:
        """Map a file name to a path directly inside base_dir.

        Raises:
            ValueError: If the name is empty or would escape base_dir.
        """
        if not file_name or Path(file_name).name != file_name or file_name in {".", ".."}:
            raise ValueError(f"Invalid audit file name: {file_name!r}")
        return base_dir / file_name

    def read_directory(self, directory: str) -> FileSnapshot:
        """Read every regular file in the directory into a snapshot."""
        base_dir = self._resolve_directory(directory)

        # Reads never create the directory; a write will.
        if self.create_missing and not base_dir.exists():
            logger.debug(f"Audit directory {base_dir} does not exist yet")
            return FileSnapshot(directory=str(base_dir), files=())

        try:
            paths = sorted(entry for entry in base_dir.iterdir() if entry.is_file())
        except OSError as e:
            raise OSError(f"Failed to list audit directory {base_dir}: {e}") from e

        files = []
        for path in paths:
            try:
                # Universal newlines turn CRLF and CR into LF.
                text = path.read_text(encoding=self.encoding)
            except OSError as e:
                raise OSError(f"Failed to read audit file {path}: {e}") from e
            files.append(FileContent(file_name=path.name, lines=split_lines(text)))

        logger.debug(f"Read {len(files)} audit files from {base_dir}")
        return FileSnapshot(directory=str(base_dir), files=tuple(files))

    def apply_update(self, directory: str, update: FileUpdate) -> None:
        """Overwrite (or create) the target file with the update's content."""
        base_dir = self._resolve_directory(directory)
        path = self._resolve_file(base_dir, update.file_name)
        self._ensure_directory(base_dir)

        try:
            # newline="" keeps the CRLF separators exactly as decided.
            path.write_text(update.new_content, encoding=self.encoding, newline="")
        except OSError as e:
            raise OSError(f"Failed to write audit file {path}: {e}") from e

        logger.debug(
            f"Wrote {len(update.new_content)} characters to {path}",
            extra={"file_name": update.file_name},
        )
