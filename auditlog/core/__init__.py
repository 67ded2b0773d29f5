"""Core domain logic for the audit log.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .audit_manager import AuditManager
from .models import (
    LINE_SEPARATOR,
    AuditSummary,
    DuplicateLogFileIndexError,
    FileContent,
    FileSnapshot,
    FileUpdate,
    InvalidLogFileNameError,
    LogFileIntegrityError,
    VisitRecord,
    split_lines,
)

__all__ = [
    "LINE_SEPARATOR",
    "AuditManager",
    "AuditSummary",
    "DuplicateLogFileIndexError",
    "FileContent",
    "FileSnapshot",
    "FileUpdate",
    "InvalidLogFileNameError",
    "LogFileIntegrityError",
    "VisitRecord",
    "split_lines",
]
