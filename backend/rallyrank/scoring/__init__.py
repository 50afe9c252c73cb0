"""Scoring rules for tennis sets and matches."""

from . import tennis

__all__ = [
    "tennis",
]
