"""auditlog: record visitors in rotating audit files."""

__version__ = "0.1.0"
