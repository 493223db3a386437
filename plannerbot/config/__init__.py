"""Configuration package."""

from .settings import PlannerBotSettings, get_settings, reset_settings

__all__ = ["PlannerBotSettings", "get_settings", "reset_settings"]
