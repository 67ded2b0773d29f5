"""Command-line interface adapters.

Provides CLI commands for the audit log:
- add: Record a visit
- list: Show every stored record
- summary: Report file and record counts
"""

from .commands import CLICommandHandler, run_command

__all__ = ["CLICommandHandler", "run_command"]
