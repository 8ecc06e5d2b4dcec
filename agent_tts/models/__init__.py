"""Shared typed data models for the filter pipeline.

This package contains dataclasses used across filter modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    FilterResult,
    Forwarded,
    ParsedMessage,
    Role,
    Suppressed,
    coerce_role,
)

__all__ = [
    "FilterResult",
    "Forwarded",
    "ParsedMessage",
    "Role",
    "Suppressed",
    "coerce_role",
]
