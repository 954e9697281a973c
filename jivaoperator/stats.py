"""Data exchanged with the volume controller: statistics and volume records."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

BYTES_TO_GB = 1073741824
BYTES_TO_MB = 1048567
BYTES_TO_KB = 1024
MIC_SEC = 1000000

_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?\Z")


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find ``key`` exactly, falling back to a case-insensitive match."""
    if key in data:
        return data[key]
    folded = key.casefold()
    for name, value in data.items():
        if name.casefold() == folded:
            return value
    return None


def _number(value: Any) -> str:
    """Keep a numeric value as its literal text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        if not _NUMBER_RE.match(value):
            raise ValueError(f"invalid number literal {value!r}")
        return value
    raise TypeError(f"expected a number, got {type(value).__name__}")


def _string(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _boolean(value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


def _integer(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


def _string_map(value: Any) -> dict[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise TypeError(f"expected an object, got {type(value).__name__}")
    return {str(k): _string(v) for k, v in value.items()}


@dataclass
class Replica:
    """A replica connected to the target."""

    address: str = ""
    mode: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Replica:
        return cls(
            address=_string(_lookup(data, "Address")),
            mode=_string(_lookup(data, "Mode")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"Address": self.address, "Mode": self.mode}


@dataclass
class Resource:
    """ID, links and actions attached to a controller object."""

    id: str = ""
    type: str = ""
    links: dict[str, str] | None = None
    actions: dict[str, str] | None = None

    @staticmethod
    def _resource_fields(data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "id": _string(_lookup(data, "id")),
            "type": _string(_lookup(data, "type")),
            "links": _string_map(_lookup(data, "links")),
            "actions": _string_map(_lookup(data, "actions")),
        }

    def _resource_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.id:
            out["id"] = self.id
        if self.type:
            out["type"] = self.type
        out["links"] = self.links
        out["actions"] = self.actions
        return out


@dataclass
class Collection:
    """Type, links and actions of a list of objects."""

    type: str = ""
    links: dict[str, str] | None = None
    actions: dict[str, str] | None = None

    def _collection_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = self.type
        if self.links:
            out["links"] = self.links
        if self.actions:
            out["actions"] = self.actions
        return out


@dataclass
class Volume(Resource):
    """A volume known to a controller."""

    name: str = ""
    replica_count: int = 0
    read_only: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Volume:
        return cls(
            **cls._resource_fields(data),
            name=_string(_lookup(data, "name")),
            replica_count=_integer(_lookup(data, "replicaCount")),
            read_only=_string(_lookup(data, "readOnly")),
        )

    def to_dict(self) -> dict[str, Any]:
        out = self._resource_dict()
        out["name"] = self.name
        out["replicaCount"] = self.replica_count
        out["readOnly"] = self.read_only
        return out


@dataclass
class ResizeInput(Resource):
    """Request body for resizing a volume."""

    name: str = ""
    size: str = ""

    def to_dict(self) -> dict[str, Any]:
        out = self._resource_dict()
        out["name"] = self.name
        out["size"] = self.size
        return out


@dataclass
class Volumes(Collection):
    """The volumes served by one controller."""

    data: list[Volume] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Volumes:
        items = _lookup(data, "data") or []
        return cls(
            type=_string(_lookup(data, "type")),
            links=_string_map(_lookup(data, "links")),
            actions=_string_map(_lookup(data, "actions")),
            data=[Volume.from_dict(item) for item in items],
        )

    def to_dict(self) -> dict[str, Any]:
        out = self._collection_dict()
        out["data"] = [volume.to_dict() for volume in self.data]
        return out


@dataclass
class Stats:
    """Statistics reported by a volume controller; numbers keep their literal text."""

    got: bool = False
    iqn: str = ""
    reads: str = ""
    total_read_time: str = ""
    total_read_block_count: str = ""
    total_read_bytes: str = ""
    writes: str = ""
    total_write_time: str = ""
    total_write_block_count: str = ""
    total_write_bytes: str = ""
    used_logical_blocks: str = ""
    used_blocks: str = ""
    sector_size: str = ""
    size: str = ""
    revision_counter: str = ""
    replica_counter: str = ""
    up_time: str = ""
    name: str = ""
    replicas: list[Replica] = field(default_factory=list)
    target_status: str = ""
    is_client_connected: bool = False

    _NUMBER_FIELDS = (
        ("reads", "ReadIOPS"),
        ("total_read_time", "TotalReadTime"),
        ("total_read_block_count", "TotalReadBlockCount"),
        ("total_read_bytes", "TotalReadBytes"),
        ("writes", "WriteIOPS"),
        ("total_write_time", "TotalWriteTime"),
        ("total_write_block_count", "TotalWriteBlockCount"),
        ("total_write_bytes", "TotalWriteBytes"),
        ("used_logical_blocks", "UsedLogicalBlocks"),
        ("used_blocks", "UsedBlocks"),
        ("sector_size", "SectorSize"),
        ("size", "Size"),
        ("revision_counter", "RevisionCounter"),
        ("replica_counter", "ReplicaCounter"),
        ("up_time", "UpTime"),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Stats:
        if not isinstance(data, Mapping):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        numbers = {attr: _number(_lookup(data, key)) for attr, key in cls._NUMBER_FIELDS}
        replicas = _lookup(data, "Replicas") or []
        return cls(
            got=_boolean(_lookup(data, "Got")),
            iqn=_string(_lookup(data, "iqn")),
            name=_string(_lookup(data, "Name")),
            replicas=[Replica.from_dict(item) for item in replicas],
            target_status=_string(_lookup(data, "Status")),
            is_client_connected=_boolean(_lookup(data, "IsClientConnected")),
            **numbers,
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Stats:
        """Decode controller JSON, keeping numbers exactly as written."""
        data = json.loads(text, parse_int=str, parse_float=str)
        return cls.from_dict(data)