"""CLI command implementations for the audit log.

This adapter maps CLI commands (add, list, summary) to AuditPort
operations. It handles CLI-specific argument parsing, formatting and
error reporting.
"""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any

from auditlog.core.models import TIMESTAMP_FORMAT
from auditlog.core.ports import AuditPort

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to AuditPort.

    Every method returns a result dictionary instead of raising, so the
    caller can print it as JSON.
    """

    def __init__(self, audit: AuditPort):
        """Initialize the CLI command handler.

        Args:
            audit: AuditPort implementation to execute commands.
        """
        self.audit = audit

    def add_record(
        self, visitor_name: str, time_of_visit: str | None = None
    ) -> dict[str, Any]:
        """Record a visit via CLI.

        Args:
            visitor_name: Name of the visitor.
            time_of_visit: ISO-8601 timestamp. Defaults to the current
                local time, truncated to seconds.

        Returns:
            Dictionary with status, target file and message.
        """
        try:
            if time_of_visit is None:
                visited_at = datetime.now().replace(microsecond=0)
            else:
                visited_at = datetime.fromisoformat(time_of_visit)

            update = self.audit.add_record(visitor_name, visited_at)

            return {
                "status": "success",
                "operation": "add",
                "visitor_name": visitor_name,
                "time_of_visit": visited_at.strftime(TIMESTAMP_FORMAT),
                "file_name": update.file_name,
                "message": f"Visit of {visitor_name} recorded in {update.file_name}",
            }

        except (ValueError, OSError) as e:
            logger.error(f"Failed to add record: {e}")
            return {
                "status": "error",
                "operation": "add",
                "visitor_name": visitor_name,
                "message": str(e),
            }

    def list_records(self, output_format: str = "json") -> dict[str, Any]:
        """List stored records via CLI.

        Args:
            output_format: Output format ('json', 'text'). Default 'json'.

        Returns:
            Dictionary with the records or status/message on error.
        """
        if output_format not in ("json", "text"):
            return {
                "status": "error",
                "operation": "list",
                "message": f"Unsupported format: {output_format}",
            }

        try:
            records = self.audit.list_records()
        except (ValueError, OSError) as e:
            logger.error(f"Failed to list records: {e}")
            return {
                "status": "error",
                "operation": "list",
                "message": str(e),
            }

        if output_format == "text":
            data: Any = "\n".join(record.serialize() for record in records)
        else:
            data = [
                {
                    "visitor_name": record.visitor_name,
                    "time_of_visit": record.time_of_visit.strftime(TIMESTAMP_FORMAT),
                }
                for record in records
            ]

        return {
            "status": "success",
            "operation": "list",
            "count": len(records),
            "data": data,
        }

    def get_summary(self) -> dict[str, Any]:
        """Report file and record counts via CLI."""
        try:
            summary = self.audit.get_summary()
        except (ValueError, OSError) as e:
            logger.error(f"Failed to get summary: {e}")
            return {
                "status": "error",
                "operation": "summary",
                "message": str(e),
            }

        data = asdict(summary)
        data["current_file_is_full"] = summary.current_file_is_full
        return {
            "status": "success",
            "operation": "summary",
            "data": data,
        }


def run_command(
    audit: AuditPort,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler methods.

    Args:
        audit: AuditPort implementation.
        command: Command name ('add', 'list', 'summary').
        args: Dictionary of command arguments.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If command is not recognized or a required
            argument is missing or has the wrong type.
    """
    handler = CLICommandHandler(audit)

    if command == "add":
        if "visitor_name" not in args:
            raise ValueError("Missing required parameter: visitor_name")
        if not isinstance(args["visitor_name"], str):
            raise ValueError("visitor_name must be a string")
        if not isinstance(args.get("time_of_visit"), (str, type(None))):
            raise ValueError("time_of_visit must be an ISO-8601 string")
        return handler.add_record(
            args["visitor_name"],
            args.get("time_of_visit"),
        )

    elif command == "list":
        return handler.list_records(args.get("format", "json"))

    elif command == "summary":
        return handler.get_summary()

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")
