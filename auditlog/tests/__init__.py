"""Test suite for the audit log.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - No filesystem access, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Tests against real temporary directories
   - Validates adapter behavior and error handling

3. fakes/: Port implementations for testing
   - In-memory implementation of AuditStoragePort
   - Used by core unit tests
"""
