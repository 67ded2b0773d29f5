"""External adapters for the audit log.

This package contains all I/O (filesystem, command line) and provides
implementations of the core port interfaces.

Adapter Organization:

- storage/: Adapters for reading and writing audit files (local filesystem)
- cli/: Command-line interface commands
"""
