import threading

import pytest

from jivaoperator.request import (
    TransitionRegistry,
    VolumeBusyError,
    add_volume_to_transition_list,
    remove_volume_from_transition_list,
)


def test_add_records_request():
    registry = TransitionRegistry()
    registry.add("pvc-1", "CreateVolume")
    assert registry.get("pvc-1") == "CreateVolume"
    assert "pvc-1" in registry
    assert len(registry) == 1


def test_add_twice_raises_busy():
    registry = TransitionRegistry()
    registry.add("pvc-1", "CreateVolume")
    with pytest.raises(VolumeBusyError, match="Volume Busy, CreateVolume is already in progress"):
        registry.add("pvc-1", "DeleteVolume")
    assert registry.get("pvc-1") == "CreateVolume"


def test_remove_frees_volume():
    registry = TransitionRegistry()
    registry.add("pvc-1", "CreateVolume")
    registry.remove("pvc-1")
    assert "pvc-1" not in registry
    registry.add("pvc-1", "DeleteVolume")
    assert registry.get("pvc-1") == "DeleteVolume"


def test_remove_unknown_is_ignored():
    registry = TransitionRegistry()
    registry.add("pvc-1", "CreateVolume")
    registry.remove("pvc-2")
    assert len(registry) == 1


def test_concurrent_adds_admit_only_one():
    registry = TransitionRegistry()
    outcomes = []
    lock = threading.Lock()

    def worker(n):
        try:
            registry.add("pvc-shared", f"req-{n}")
            result = n
        except VolumeBusyError:
            result = None
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    winners = [n for n in outcomes if n is not None]
    assert len(winners) == 1
    assert len(outcomes) == 20
    assert registry.get("pvc-shared") == f"req-{winners[0]}"
    assert len(registry) == 1


def test_module_level_functions():
    volume_id = "pvc-module-level-test"
    add_volume_to_transition_list(volume_id, "NodePublish")
    try:
        with pytest.raises(VolumeBusyError):
            add_volume_to_transition_list(volume_id, "NodeUnpublish")
    finally:
        remove_volume_from_transition_list(volume_id)
    add_volume_to_transition_list(volume_id, "NodeUnpublish")
    remove_volume_from_transition_list(volume_id)
    with pytest.raises(VolumeBusyError):
        add_volume_to_transition_list(volume_id, "A")
        add_volume_to_transition_list(volume_id, "B")
    remove_volume_from_transition_list(volume_id)