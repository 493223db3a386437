"""Recurrence-specific exceptions for error handling."""

from typing import Optional


class RecurrenceError(Exception):
    """Base exception for recurrence expansion errors."""

    def __init__(self, message: str, item_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.item_id = item_id


class InvalidRuleError(RecurrenceError):
    """Exception raised when a recurrence rule cannot be normalized."""


class DegenerateCadenceError(RecurrenceError):
    """Exception raised when an expansion walk hits the iteration ceiling."""
