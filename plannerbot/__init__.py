"""PlannerBot - recurrence expansion and calendar bucketing for a personal planner.

The package materializes the concrete occurrences of recurring tasks inside an
arbitrary day window and groups them, together with one-off tasks, into a
day-indexed calendar view.
"""

__version__ = "1.0.0"
__author__ = "PlannerBot Team"
__email__ = "support@plannerbot.local"
__description__ = "Recurrence expansion engine and calendar day bucketer for personal planning"

__all__ = [
    "__author__",
    "__description__",
    "__email__",
    "__version__",
]
