"""Naming helpers and reconcile timing."""

from __future__ import annotations

from datetime import timedelta

# Interval after which reconciliation is triggered periodically.
SYNC_PERIOD = timedelta(seconds=5)
# Interval after which a failed reconciliation is retried.
RETRY_PERIOD = timedelta(seconds=2)

_MAX_NAME_LEN = 43


def strip_name(name: str) -> str:
    """Lower-case ``name`` and trim it so that derived resource names fit in 63 characters."""
    name = name.lower()[:_MAX_NAME_LEN]
    if name.endswith("-"):
        name = name[:-1]
    return name