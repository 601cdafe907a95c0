"""
Core record model and protocol logic.

This package contains the record model, the translation to wire records,
and the construction of zone queries and update transactions.
"""

from .record import Record, UpdateMode

__all__ = ["Record", "UpdateMode"]
