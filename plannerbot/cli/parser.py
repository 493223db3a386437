"""Command-line argument parsing for PlannerBot.

This module handles all command-line argument parsing functionality,
including subcommands, shared logging options and date validation.
"""

import argparse
from datetime import date
from pathlib import Path

from .. import __version__
from ..calendar.window import CalendarViewType


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format for command-line arguments.

    Raises:
        argparse.ArgumentTypeError: If date format is invalid

    Example:
        >>> parse_date("2024-01-15")
        datetime.date(2024, 1, 15)
    """
    try:
        return date.fromisoformat(date_str)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"Invalid date format: {date_str}. Use YYYY-MM-DD") from err


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser.

    Returns:
        Configured ArgumentParser with the ``calendar`` and ``expand`` subcommands

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["calendar", "tasks.yaml", "--view", "week"])
    """
    parser = argparse.ArgumentParser(
        prog="plannerbot",
        description="PlannerBot - expand recurring tasks and build calendar views",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s calendar tasks.yaml                          # Month view around today
  %(prog)s calendar tasks.yaml --view week --date 2024-06-03
  %(prog)s calendar tasks.json --hide-completed
  %(prog)s expand tasks.yaml --item gym --from 2024-06-01 --to 2024-06-30
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show version information"
    )

    logging_group = parser.add_argument_group("logging", "Console logging options")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Console log level (defaults to the configured log_level)",
    )
    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console output"
    )

    parser.add_argument(
        "--config", type=Path, metavar="CONFIG_FILE", help="YAML configuration file to load"
    )

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    calendar_parser = subparsers.add_parser(
        "calendar", help="Print the calendar view for a window as JSON"
    )
    calendar_parser.add_argument("items", type=Path, help="YAML or JSON file with the task list")
    calendar_parser.add_argument(
        "--view",
        choices=[view.value for view in CalendarViewType],
        default=CalendarViewType.MONTH.value,
        help="Calendar view to resolve (default: month)",
    )
    calendar_parser.add_argument(
        "--date", type=parse_date, help="Anchor day in YYYY-MM-DD format (default: today)"
    )
    calendar_parser.add_argument(
        "--hide-completed", action="store_true", help="Leave completed tasks out of the view"
    )

    expand_parser = subparsers.add_parser(
        "expand", help="Print the occurrences of one recurring task as JSON"
    )
    expand_parser.add_argument("items", type=Path, help="YAML or JSON file with the task list")
    expand_parser.add_argument("--item", required=True, metavar="ID", help="Identifier of the task")
    expand_parser.add_argument(
        "--from", dest="window_from", type=parse_date, required=True, help="First day (inclusive)"
    )
    expand_parser.add_argument(
        "--to", dest="window_to", type=parse_date, required=True, help="Last day (inclusive)"
    )

    return parser


__all__ = [
    "create_parser",
    "parse_date",
]
