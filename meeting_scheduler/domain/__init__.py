"""Domain models for the meeting CSP."""

from .models import MeetingVariable, VariableStore

__all__ = [
    "MeetingVariable",
    "VariableStore",
]
