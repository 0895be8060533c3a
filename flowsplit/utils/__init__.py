"""Utility functions for flowsplit."""

from flowsplit.utils.identifiers import generate_uuid

__all__ = [
    "generate_uuid",
]
