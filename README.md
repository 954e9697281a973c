# jivaoperator

Pure-Python building blocks for an operator that manages replicated block
volumes. The package has no runtime dependencies.

## Installation

```
pip install .
```

For development, install the test extra and run the tests:

```
pip install .[test]
pytest
```

## Modules

### `jivaoperator.version`

- `get()` returns the version string (`VERSION`).
- `get_git_commit()` returns `COMMIT` when it is set; otherwise it runs
  `git rev-parse --verify HEAD` and returns its output, or `""` (after logging
  an error) when git fails.
- `get_version_details()` returns the version joined to the first seven
  characters of the commit, e.g. `0.0.1-abcdef1`; it raises `ValueError` when
  the commit is shorter than that.
- `is_current_version_valid(v)` is true for 2.6.0, 2.7.0, 2.8.0 and 2.9.0
  (anything after a `-` is ignored).
- `is_desired_version_valid(v)` is true when `v` matches the build version,
  again ignoring any `-` suffix.

### `jivaoperator.request`

`TransitionRegistry` is a thread-safe map from volume IDs to the request
running on them. `add()` raises `VolumeBusyError` when the volume is already
busy; `remove()` ignores unknown IDs. The module-level
`add_volume_to_transition_list()` and `remove_volume_from_transition_list()`
work on one process-wide registry.

### `jivaoperator.utils`

`strip_name(name)` lower-cases a name, cuts it to 43 characters and drops one
trailing `-`, so that derived resource names stay within 63 characters.
`SYNC_PERIOD` (5 s) and `RETRY_PERIOD` (2 s) are the reconcile intervals as
`timedelta` values.

### `jivaoperator.stats`

Dataclasses for data exchanged with a volume controller: `Stats`, `Replica`,
`Volume`, `Volumes`, `ResizeInput`, plus the `Resource` and `Collection` bases.
`Stats.from_json()` decodes controller JSON and keeps every numeric field as
its literal text; keys are matched exactly first, then case-insensitively.
`Volume.to_dict()`, `Volumes.to_dict()` and `ResizeInput.to_dict()` give the
JSON-ready form.

### `jivaoperator.usage`

- `to_giga_units(size)` turns a size such as `"104.5 GB"` into whole gigabytes
  (1 GB = 1000 MB; `KiB`/`GiB` suffixes are read with decimal multipliers too).
  It raises `ValueError` on unparsable input.
- `get_ping_period()` reads `OPENEBS_IO_ANALYTICS_PING_INTERVAL` as a duration
  like `2h` or `90m`; missing, invalid or under-one-hour values give 24 hours.
- `Usage` is a dataclass holding the event, application and client fields of
  one usage metric, with `new_event()`, `set_volume_capacity()`,
  `set_volume_type()` and `set_replica_count()`; each returns the instance so
  calls can be chained.

### `jivaoperator.statefulset`

- `Builder` sets name, namespace, service name, pod management policy,
  annotations, labels, selector match labels, node selector, owner references,
  replicas and update strategy type on a `StatefulSetObject`. The `with_*`
  methods merge into existing maps; the `with_*_new` methods replace them.
- `StatefulSet` wraps an object and reports its rollout: `is_rollout()`,
  `rollout_status()` (a `RolloutOutput`) and `rollout_status_raw()` (compact
  JSON bytes). The checks are also available as the functions
  `is_older_replica_active`, `is_termination_in_progress`,
  `is_update_in_progress` and `is_not_sync_spec`, named by `PredicateName`.

### `jivaoperator.kube_volume`

`VolumeBuilder` builds a `PodVolume` backed by a host directory
(`with_host_directory`, `with_host_path_and_type` with a `HostPathType`), a
persistent volume claim (`with_pvc_source`) or an `EmptyDirSource`
(`with_empty_dir`).

## Example

```python
from jivaoperator.kube_volume import VolumeBuilder
from jivaoperator.utils import strip_name

volume = (
    VolumeBuilder()
    .with_name(strip_name("PV1"))
    .with_host_directory("/var/openebs/local/pv1")
    .build()
)
```

Builders collect problems as you call them; `build()` raises
`VolumeBuildError` or `StatefulSetBuildError` listing every one of them.

## What this package does not do

- It does not talk to a Kubernetes cluster: objects are built and checked in
  memory and are never created, read or watched on a cluster.
- It does not send usage events anywhere; `Usage` only holds their fields, and
  there is no periodic ping loop.
- The stateful set builder has no pod template or volume claim template
  settings.
- There is no command-line tool, controller process or CSI driver.