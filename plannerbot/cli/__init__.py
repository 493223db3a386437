"""CLI module for PlannerBot.

Loads a task list from a YAML or JSON file and prints either a calendar view
or the occurrences of one recurring task as JSON.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from ..calendar.bucketer import build_calendar
from ..calendar.window import resolve_window
from ..config.settings import PlannerBotSettings, get_settings
from ..recurrence.exceptions import DegenerateCadenceError, InvalidRuleError
from ..recurrence.expander import RecurrenceExpander
from ..recurrence.models import SchedulableItem
from ..utils.logging import setup_logging
from .parser import create_parser, parse_date

logger = logging.getLogger(__name__)


class ItemsFileError(Exception):
    """Raised when the task list file cannot be read."""


def load_items(path: Path) -> list[dict[str, Any]]:
    """Read a task list from a YAML or JSON file.

    The file holds either a list of task mappings or a mapping with an
    ``items`` key.

    Raises:
        ItemsFileError: If the file is missing, unparseable or has the wrong shape
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ItemsFileError(f"Could not read items from {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("items")
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise ItemsFileError(f"{path} must contain a list of task mappings")
    return data


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def run_calendar(args: argparse.Namespace, settings: PlannerBotSettings) -> int:
    items = load_items(args.items)
    anchor = args.date or datetime.now(settings.timezone).date()
    window = resolve_window(args.view, anchor, settings.week_start_index)
    view = build_calendar(items, window, hide_completed=args.hide_completed, settings=settings)
    _dump(view.to_dict())
    return 0


def run_expand(args: argparse.Namespace, settings: PlannerBotSettings) -> int:
    items = load_items(args.items)
    raw = next((entry for entry in items if str(entry.get("id")) == args.item), None)
    if raw is None:
        print(f"Error: no task with id {args.item!r} in {args.items}", file=sys.stderr)
        return 1

    if args.window_from > args.window_to:
        print("Error: --from must not be after --to", file=sys.stderr)
        return 1

    try:
        item = SchedulableItem.model_validate(raw)
    except ValidationError as e:
        print(f"Error: malformed task {args.item!r}: {e}", file=sys.stderr)
        return 1

    try:
        occurrences = RecurrenceExpander(settings).expand(item, args.window_from, args.window_to)
    except InvalidRuleError as e:
        print(f"Error: invalid recurrence rule for {args.item!r}: {e.message}", file=sys.stderr)
        return 1
    except DegenerateCadenceError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    _dump([occurrence.model_dump(mode="json", by_alias=True) for occurrence in occurrences])
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = PlannerBotSettings(config_file=args.config) if args.config else get_settings()
    setup_logging(
        args.log_level or settings.log_level,
        colors=settings.log_colors and not args.no_log_colors,
    )

    commands = {"calendar": run_calendar, "expand": run_expand}
    try:
        return commands[args.command](args, settings)
    except ItemsFileError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


__all__ = [
    "ItemsFileError",
    "create_parser",
    "load_items",
    "main",
    "parse_date",
]
