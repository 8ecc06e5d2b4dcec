"""Telemetry and observability helpers.

This package emits deterministic filter events for auditing chain behavior.
"""

from .logger import FilterLogger

__all__ = ["FilterLogger"]
