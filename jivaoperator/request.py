"""Tracking of volumes that have an operation in progress."""

from __future__ import annotations

import threading


class VolumeBusyError(RuntimeError):
    """Raised when a volume already has an operation in progress."""


class TransitionRegistry:
    """Thread-safe map of volume IDs to the request running on them."""

    def __init__(self) -> None:
        self._volumes: dict[str, str] = {}
        self._lock = threading.Lock()

    def add(self, volume_id: str, request: str) -> None:
        """Mark ``volume_id`` as busy with ``request``."""
        with self._lock:
            if volume_id in self._volumes:
                raise VolumeBusyError(
                    f"Volume Busy, {self._volumes[volume_id]} is already in progress"
                )
            self._volumes[volume_id] = request

    def remove(self, volume_id: str) -> None:
        """Forget ``volume_id``; unknown IDs are ignored."""
        with self._lock:
            self._volumes.pop(volume_id, None)

    def get(self, volume_id: str) -> str | None:
        """Return the request running on ``volume_id``, if any."""
        with self._lock:
            return self._volumes.get(volume_id)

    def __contains__(self, volume_id: object) -> bool:
        with self._lock:
            return volume_id in self._volumes

    def __len__(self) -> int:
        with self._lock:
            return len(self._volumes)


_registry = TransitionRegistry()


def add_volume_to_transition_list(volume_id: str, request: str) -> None:
    """Mark ``volume_id`` busy in the process-wide registry."""
    _registry.add(volume_id, request)


def remove_volume_from_transition_list(volume_id: str) -> None:
    """Release ``volume_id`` from the process-wide registry."""
    _registry.remove(volume_id)