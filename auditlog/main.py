"""Composition root for the audit log.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Entry point selection (one-shot command or interactive CLI)
"""

import argparse
import json
import logging
import sys
from typing import Any

from auditlog.adapters.cli.commands import CLICommandHandler, run_command
from auditlog.adapters.storage.filesystem import FilesystemStorageAdapter
from auditlog.config import Settings, load_settings
from auditlog.core.audit_manager import AuditManager
from auditlog.core.audit_service import AuditService


def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for audit commands.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    while True:
        try:
            command_line = input("auditlog> ").strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            # Arguments are a single JSON object
            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            if not isinstance(args, dict):
                logger.error("Arguments must be a JSON object. Use 'help' for command syntax.")
                continue

            try:
                result = run_command(cli_handler.audit, command, args)
                print(json.dumps(result, indent=2, default=str))
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({
                    "status": "error",
                    "message": str(e)
                }, indent=2))

        except EOFError:
            # Ctrl+D to exit
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  add
    Record a visit. The visit time defaults to now.
    Required: visitor_name
    Optional: time_of_visit (ISO-8601)

    Example: add {"visitor_name": "Alice", "time_of_visit": "2019-04-06T18:00:00"}

  list
    List every stored record in write order.
    Optional: format (json, text)

    Example: list {"format": "text"}

  summary
    Show file and record counts.

    Example: summary

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Logs go to stderr so command results on stdout stay parseable.
    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_service(settings: Settings) -> AuditService:
    """Wire the storage adapter and audit manager into an AuditService.

    Args:
        settings: Validated application settings.

    Returns:
        AuditService bound to the configured audit directory.
    """
    storage = FilesystemStorageAdapter(create_missing=settings.create_audit_directory)
    manager = AuditManager(
        max_entries_per_file=settings.max_entries_per_file,
        file_extension=settings.file_extension,
    )
    return AuditService(
        storage=storage,
        manager=manager,
        directory=settings.audit_directory,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    With no sub-command the interactive CLI is started.
    """
    parser = argparse.ArgumentParser(
        prog="auditlog",
        description="Record visitors in rotating audit files.",
    )
    subparsers = parser.add_subparsers(dest="command")

    add_parser = subparsers.add_parser("add", help="Record a visit")
    add_parser.add_argument("visitor_name", help="Name of the visitor")
    add_parser.add_argument(
        "--time",
        dest="time_of_visit",
        default=None,
        help="Visit time in ISO-8601 (default: now)",
    )

    list_parser = subparsers.add_parser("list", help="List stored records")
    list_parser.add_argument(
        "--format",
        dest="format",
        choices=["json", "text"],
        default="json",
        help="Output format",
    )

    subparsers.add_parser("summary", help="Show file and record counts")
    return parser


def run(argv: list[str] | None = None) -> int:
    """Load configuration, wire components, and execute one run.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Process exit code: 0 on success, 1 if the command failed.
    """
    args = build_parser().parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.debug(
        f"Audit directory {settings.audit_directory}, "
        f"{settings.max_entries_per_file} entries per file"
    )

    service = build_service(settings)
    cli_handler = CLICommandHandler(service)

    if args.command is None:
        _run_cli_interactive(cli_handler)
        return 0

    command_args: dict[str, Any] = {
        key: value for key, value in vars(args).items() if key != "command"
    }
    result = run_command(service, args.command, command_args)
    print(json.dumps(result, indent=2, default=str))
    return 0 if result.get("status") == "success" else 1


def main(argv: list[str] | None = None) -> None:
    """Application entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Exit codes:
        0: Successful run
        1: Command or configuration error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        sys.exit(run(argv))
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
