"""Anonymous usage events: event fields, volume size conversion and ping interval."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import timedelta

# Analytics tracking code of the project.
GA_CLIENT_ID = "UA-127388617-1"

# Event categories.
INSTALL_EVENT = "install"
PING = "jiva-csi-ping"
VOLUME_PROVISION = "volume-provision"
VOLUME_DEPROVISION = "volume-deprovision"
APP_NAME = "OpenEBS"

RUNNING_STATUS = "running"
EVENT_LABEL_NODE = "nodes"
EVENT_LABEL_CAPACITY = "capacity"

REPLICA = "replica:"
DEFAULT_REPLICA_COUNT = "replica:3"

DEFAULT_CAS_TYPE = "jiva"

# Environment variable that holds the user's consent to send usage data.
OPENEBS_ENABLE_ANALYTICS = "OPENEBS_IO_ENABLE_ANALYTICS"
# Environment variable that holds the ping interval.
OPENEBS_PING_PERIOD = "OPENEBS_IO_ANALYTICS_PING_INTERVAL"

DEFAULT_PING_PERIOD = timedelta(hours=24)
MINIMUM_PING_PERIOD = timedelta(hours=1)

_GB = 1000**3
_SIZE_RE = re.compile(r"(\d+(?:\.\d+)*) ?([kKmMgGtTpP])?[iI]?[bB]?")
_DECIMAL_MULTIPLIERS = {
    "k": 1000,
    "m": 1000**2,
    "g": 1000**3,
    "t": 1000**4,
    "p": 1000**5,
}

_NS = 1
_US = 1000 * _NS
_MS = 1000 * _US
_S = 1000 * _MS
_DURATION_UNITS = {
    "ns": _NS,
    "us": _US,
    "\u00b5s": _US,
    "\u03bcs": _US,
    "ms": _MS,
    "s": _S,
    "m": 60 * _S,
    "h": 3600 * _S,
}
_DURATION_PART_RE = re.compile(r"(\d*)(?:(\.)(\d*))?([^\d.]+)")


def _from_human_size(size: str) -> int:
    """Parse a human-readable size with decimal multipliers into bytes."""
    match = _SIZE_RE.fullmatch(size)
    if match is None:
        raise ValueError(f"invalid size: '{size}'")
    number, prefix = match.groups()
    try:
        value = float(number)
    except ValueError as exc:
        raise ValueError(f"invalid size: '{size}'") from exc
    if prefix:
        value *= _DECIMAL_MULTIPLIERS[prefix.lower()]
    return int(value)


def to_giga_units(size: str) -> int:
    """Convert a size such as ``"104.5 GB"`` to a whole number of gigabytes (1 GB = 1000 MB)."""
    return _from_human_size(size) // _GB


def _parse_duration_ns(text: str) -> int:
    """Parse a duration such as ``"1h30m"`` into nanoseconds."""
    original = text
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return 0
    if not text:
        raise ValueError(f"invalid duration {original!r}")
    total = 0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART_RE.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {original!r}")
        whole, dot, frac, unit = match.groups()
        frac = frac or ""
        if not whole and not frac:
            raise ValueError(f"invalid duration {original!r}")
        if dot and not whole and not frac:
            raise ValueError(f"invalid duration {original!r}")
        multiplier = _DURATION_UNITS.get(unit)
        if multiplier is None:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")
        total += int(whole or "0") * multiplier
        if frac:
            total += int(frac) * multiplier // 10 ** len(frac)
        pos = match.end()
    return -total if negative else total


def get_ping_period() -> timedelta:
    """Return the ping interval from the environment, falling back to 24 hours.

    Values that cannot be parsed, or that are shorter than one hour, give the default.
    """
    value = os.environ.get(OPENEBS_PING_PERIOD) or "24h0m0s"
    try:
        nanoseconds = _parse_duration_ns(value)
    except ValueError:
        nanoseconds = 0
    period = timedelta(microseconds=nanoseconds // 1000)
    if period < MINIMUM_PING_PERIOD:
        return DEFAULT_PING_PERIOD
    return period


@dataclass
class Usage:
    """One usage metric: event fields, application details and client details."""

    # Event
    category: str = ""
    action: str = ""
    label: str = ""
    value: int = 0
    # Application
    app_version: str = ""
    app_installer_id: str = ""
    app_id: str = ""
    app_name: str = ""
    # Client
    track_id: str = ""
    client_id: str = ""
    campaign_source: str = ""
    campaign_name: str = ""
    data_source: str = ""
    document_title: str = ""

    def new_event(self, category: str, action: str, label: str, value: int) -> Usage:
        """Set all event fields at once."""
        self.category = category
        self.action = action
        self.label = label
        self.value = value
        return self

    def set_volume_capacity(self, capacity: str) -> Usage:
        """Set the event value to the volume capacity in gigabytes; unparsable sizes give 0."""
        try:
            self.value = to_giga_units(capacity)
        except ValueError:
            self.value = 0
        return self

    def set_volume_type(self, vol_type: str, method: str) -> Usage:
        """Set the storage engine name, defaulting it for provision events."""
        if method == VOLUME_PROVISION and vol_type == "":
            self.app_name = DEFAULT_CAS_TYPE
        else:
            self.app_name = vol_type
        return self

    def set_replica_count(self, count: str, method: str) -> Usage:
        """Set the replica count action, defaulting it for provision events."""
        if method == VOLUME_PROVISION and count == "":
            self.action = DEFAULT_REPLICA_COUNT
        else:
            self.action = REPLICA + count
        return self