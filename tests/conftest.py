"""Shared test configuration and lightweight fixtures."""

import logging
import os
from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest

from plannerbot.config.settings import ENV_PREFIX, PlannerBotSettings, reset_settings
from plannerbot.utils.logging import ROOT_LOGGER_NAME
from plannerbot.recurrence.expander import RecurrenceExpander
from plannerbot.recurrence.models import SchedulableItem


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the user's environment, .env and config files."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()

    # Undo setup_logging so caplog keeps seeing plannerbot records
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def settings(tmp_path) -> PlannerBotSettings:
    """Settings with defaults only (no YAML file is found)."""
    return PlannerBotSettings(config_file=tmp_path / "absent.yaml", log_colors=False)


@pytest.fixture
def expander(settings) -> RecurrenceExpander:
    return RecurrenceExpander(settings)


@pytest.fixture
def make_item() -> Callable[..., SchedulableItem]:
    """Factory for recurring seed items."""

    def _make(
        rule: dict[str, Any],
        due_date: Any = datetime(2024, 6, 3, 9, 30),
        item_id: str = "task-1",
        **fields: Any,
    ) -> SchedulableItem:
        payload = {
            "id": item_id,
            "title": fields.pop("title", "Water the plants"),
            "dueDate": due_date,
            "isRecurring": True,
            "recurrenceRule": rule,
        }
        payload.update(fields)
        return SchedulableItem.model_validate(payload)

    return _make


def pytest_configure(config: Any) -> None:
    """Register the project's test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")
    config.addinivalue_line("markers", "smoke: Basic smoke tests")
    config.addinivalue_line("markers", "integration: Cross-module tests")
