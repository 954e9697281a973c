"""Pod volumes: a validating builder for named volumes used within pods."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Callable


class HostPathType(str, Enum):
    """Kinds of host path a volume may point at."""

    UNSET = ""
    DIRECTORY_OR_CREATE = "DirectoryOrCreate"
    DIRECTORY = "Directory"
    FILE_OR_CREATE = "FileOrCreate"
    FILE = "File"
    SOCKET = "Socket"
    CHAR_DEVICE = "CharDevice"
    BLOCK_DEVICE = "BlockDevice"


@dataclass
class HostPathSource:
    """A path on the host, optionally with the kind of object expected there."""

    path: str = ""
    type: HostPathType | None = None


@dataclass
class EmptyDirSource:
    """A scratch directory that lives as long as the pod."""

    medium: str = ""
    size_limit: str | None = None


@dataclass
class PodVolume:
    """A named volume within a pod and the source backing it."""

    name: str = ""
    host_path: HostPathSource | None = None
    pvc_claim_name: str | None = None
    empty_dir: EmptyDirSource | None = None

    def is_nil(self) -> bool:
        """Tell whether the volume holds no name and no source at all."""
        return self == PodVolume()


Predicate = Callable[[PodVolume], bool]


class VolumeBuildError(ValueError):
    """Raised when a volume cannot be built."""


class VolumeBuilder:
    """Builds a pod volume, collecting errors until :meth:`build`."""

    def __init__(self, volume: PodVolume | None = None) -> None:
        self.volume = volume if volume is not None else PodVolume()
        self.errors: list[str] = []

    def _fail(self, message: str) -> VolumeBuilder:
        self.errors.append(message)
        return self

    def _set_source(
        self,
        *,
        host_path: HostPathSource | None = None,
        pvc_claim_name: str | None = None,
    ) -> None:
        # Setting a source replaces whatever source was there before.
        self.volume.host_path = host_path
        self.volume.pvc_claim_name = pvc_claim_name
        self.volume.empty_dir = None

    def with_name(self, name: str) -> VolumeBuilder:
        if not name:
            return self._fail("failed to build Volume object: missing Volume name")
        self.volume.name = name
        return self

    def with_host_directory(self, path: str) -> VolumeBuilder:
        """Back the volume with a host path."""
        if not path:
            return self._fail("failed to build volume object: missing volume path")
        self._set_source(host_path=HostPathSource(path=path))
        return self

    def with_host_path_and_type(
        self, dirpath: str, dirtype: HostPathType | None
    ) -> VolumeBuilder:
        """Back the volume with a host path of the given kind."""
        if dirtype is None:
            return self._fail("failed to build volume object: nil volume type")
        if not dirpath:
            return self._fail("failed to build volume object: missing volume path")
        self._set_source(host_path=HostPathSource(path=dirpath, type=HostPathType(dirtype)))
        return self

    def with_pvc_source(self, pvc_name: str) -> VolumeBuilder:
        """Back the volume with a persistent volume claim."""
        if not pvc_name:
            return self._fail("failed to build volume object: missing pvc name")
        self._set_source(pvc_claim_name=pvc_name)
        return self

    def with_empty_dir(self, empty_dir: EmptyDirSource | None) -> VolumeBuilder:
        """Attach a copy of ``empty_dir`` to the volume."""
        if empty_dir is None:
            return self._fail("failed to build volume object: nil dir")
        self.volume.empty_dir = dataclasses.replace(empty_dir)
        return self

    def build(self) -> PodVolume:
        """Return the built volume, or raise if any step failed."""
        if self.errors:
            raise VolumeBuildError(f"[{' '.join(self.errors)}]")
        return self.volume