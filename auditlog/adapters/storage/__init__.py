"""Storage adapters for audit files.

Implementations support:
- Local filesystem directories
"""

from .filesystem import FilesystemStorageAdapter

__all__ = ["FilesystemStorageAdapter"]
