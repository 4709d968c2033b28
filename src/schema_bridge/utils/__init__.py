"""Utility functions and helpers."""

from schema_bridge.utils.helpers import excerpt_around, is_identifier, offset_to_position
from schema_bridge.utils.logging import configure_logging

__all__ = [
    "configure_logging",
    "excerpt_around",
    "is_identifier",
    "offset_to_position",
]
