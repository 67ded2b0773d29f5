"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeAuditStoragePort: In-memory audit file storage
"""

from .storage import FakeAuditStoragePort

__all__ = ["FakeAuditStoragePort"]
