"""Shared enums for the URL shortener application.

This module defines all status and state enums used across the codebase.
Using enums instead of string literals provides type safety and prevents typos.
"""

from enum import StrEnum

__all__ = ["HealthStatus", "LookupStatus"]


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"


class LookupStatus(StrEnum):
    """Outcome of a short key lookup, used as a metric label."""

    HIT = "hit"
    MISS = "miss"
