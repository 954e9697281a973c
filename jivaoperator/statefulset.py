"""StatefulSet objects: a validating builder and rollout status checks."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable


class PredicateName(str, Enum):
    """Names of the rollout checks, used to look up their status messages."""

    PROGRESS_DEADLINE_EXCEEDED = "ProgressDeadlineExceeded"
    NOT_SPEC_SYNCED = "NotSpecSynced"
    OLDER_REPLICA_ACTIVE = "OlderReplicaActive"
    TERMINATION_IN_PROGRESS = "TerminationInProgress"
    UPDATE_IN_PROGRESS = "UpdateInProgress"


class StatefulSetBuildError(ValueError):
    """Raised when a statefulset cannot be built or its rollout cannot be reported."""


@dataclass
class StatefulSetSpec:
    """The desired state of a statefulset."""

    replicas: int | None = None
    service_name: str = ""
    pod_management_policy: str = ""
    selector_match_labels: dict[str, str] | None = None
    node_selector: dict[str, str] | None = None
    update_strategy_type: str = ""


@dataclass
class StatefulSetStatus:
    """The observed state of a statefulset."""

    replicas: int = 0
    updated_replicas: int = 0
    current_replicas: int = 0
    observed_generation: int = 0


@dataclass
class StatefulSetObject:
    """A statefulset resource."""

    name: str = ""
    namespace: str = ""
    generation: int = 0
    annotations: dict[str, str] | None = None
    labels: dict[str, str] | None = None
    owner_references: list[Any] | None = None
    spec: StatefulSetSpec = field(default_factory=StatefulSetSpec)
    status: StatefulSetStatus = field(default_factory=StatefulSetStatus)


@dataclass
class RolloutOutput:
    """Whether a rollout finished, with a message describing its state."""

    is_rolledout: bool
    message: str

    def to_json(self) -> bytes:
        """Encode as compact JSON."""
        return json.dumps(
            {"isRolledout": self.is_rolledout, "message": self.message},
            separators=(",", ":"),
        ).encode()


class Rollout:
    """Renders a rollout output in raw form."""

    def __init__(
        self,
        output: RolloutOutput | None = None,
        raw_fn: Callable[[RolloutOutput], bytes] | None = None,
    ) -> None:
        self.output = output
        self._raw_fn = raw_fn or RolloutOutput.to_json

    def raw(self) -> bytes:
        """Return the output as bytes."""
        if self.output is None:
            raise StatefulSetBuildError("unable to get rollout status output")
        return self._raw_fn(self.output)


class StatefulSet:
    """Wrapper over a statefulset object with rollout checks."""

    def __init__(self, obj: StatefulSetObject | None = None) -> None:
        self.object = obj if obj is not None else StatefulSetObject()

    def is_older_replica_active(self) -> bool:
        """Tell whether some replicas have not been updated yet."""
        replicas = self.object.spec.replicas
        return replicas is not None and self.object.status.updated_replicas < replicas

    def is_termination_in_progress(self) -> bool:
        """Tell whether older replicas are still waiting to terminate."""
        status = self.object.status
        return status.replicas > status.updated_replicas

    def is_update_in_progress(self) -> bool:
        """Tell whether fewer replicas are current than have been updated."""
        status = self.object.status
        return status.current_replicas < status.updated_replicas

    def is_not_sync_spec(self) -> bool:
        """Tell whether the spec generation has not been observed yet."""
        return self.object.generation > self.object.status.observed_generation

    def is_rollout(self) -> tuple[PredicateName | None, bool]:
        """Run the rollout checks; return the first failing one and ``False``, or ``(None, True)``."""
        for name, predicate in _ROLLOUT_CHECKS.items():
            if predicate(self):
                return name, False
        return None, True

    def failed_rollout(self, name: PredicateName) -> RolloutOutput:
        """Return the output for a rollout held up by the check ``name``."""
        return RolloutOutput(is_rolledout=False, message=_ROLLOUT_STATUSES[name](self))

    def success_rollout(self) -> RolloutOutput:
        """Return the output for a finished rollout."""
        return RolloutOutput(
            is_rolledout=True, message="deployment successfully rolled out"
        )

    def rollout_status(self) -> RolloutOutput:
        """Return the rollout state of this statefulset."""
        name, done = self.is_rollout()
        if done or name is None:
            return self.success_rollout()
        return self.failed_rollout(name)

    def rollout_status_raw(self) -> bytes:
        """Return the rollout state as JSON bytes."""
        return Rollout(self.rollout_status()).raw()


Predicate = Callable[[StatefulSet], bool]


def is_older_replica_active(sts: StatefulSet) -> bool:
    """Predicate form of :meth:`StatefulSet.is_older_replica_active`."""
    return sts.is_older_replica_active()


def is_termination_in_progress(sts: StatefulSet) -> bool:
    """Predicate form of :meth:`StatefulSet.is_termination_in_progress`."""
    return sts.is_termination_in_progress()


def is_update_in_progress(sts: StatefulSet) -> bool:
    """Predicate form of :meth:`StatefulSet.is_update_in_progress`."""
    return sts.is_update_in_progress()


def is_not_sync_spec(sts: StatefulSet) -> bool:
    """Predicate form of :meth:`StatefulSet.is_not_sync_spec`."""
    return sts.is_not_sync_spec()


def _older_replica_message(s: StatefulSet) -> str:
    replicas = s.object.spec.replicas
    if replicas is None:
        return "replica update in-progress: some older replicas were updated"
    return (
        f"replica update in-progress: {s.object.status.updated_replicas} "
        f"of {replicas} new replicas were updated"
    )


_ROLLOUT_STATUSES: dict[PredicateName, Callable[[StatefulSet], str]] = {
    PredicateName.PROGRESS_DEADLINE_EXCEEDED: (
        lambda s: "deployment exceeded its progress deadline"
    ),
    PredicateName.OLDER_REPLICA_ACTIVE: _older_replica_message,
    PredicateName.TERMINATION_IN_PROGRESS: lambda s: (
        "replica termination in-progress: "
        f"{s.object.status.replicas - s.object.status.updated_replicas} "
        "old replicas are pending termination"
    ),
    PredicateName.UPDATE_IN_PROGRESS: lambda s: (
        f"replica update in-progress: {s.object.status.current_replicas} "
        f"of {s.object.status.updated_replicas} updated replicas are available"
    ),
    PredicateName.NOT_SPEC_SYNCED: (
        lambda s: "deployment rollout in-progress: waiting for deployment spec update"
    ),
}

_ROLLOUT_CHECKS: dict[PredicateName, Predicate] = {
    PredicateName.OLDER_REPLICA_ACTIVE: is_older_replica_active,
    PredicateName.TERMINATION_IN_PROGRESS: is_termination_in_progress,
    PredicateName.UPDATE_IN_PROGRESS: is_update_in_progress,
    PredicateName.NOT_SPEC_SYNCED: is_not_sync_spec,
}


class Builder:
    """Builds a statefulset object, collecting errors until :meth:`build`."""

    def __init__(self, sts: StatefulSet | None = None) -> None:
        self.sts = sts if sts is not None else StatefulSet()
        self.checks: list[Predicate] = []
        self.errors: list[str] = []

    @property
    def _obj(self) -> StatefulSetObject:
        return self.sts.object

    def _fail(self, message: str) -> Builder:
        self.errors.append(message)
        return self

    def with_name(self, name: str) -> Builder:
        if not name:
            return self._fail("failed to build deployment: missing name")
        self._obj.name = name
        return self

    def with_namespace(self, namespace: str) -> Builder:
        if not namespace:
            return self._fail("failed to build deployment: missing namespace")
        self._obj.namespace = namespace
        return self

    def with_service_name(self, name: str) -> Builder:
        if not name:
            return self._fail("failed to build deployment: missing serviceName")
        self._obj.spec.service_name = name
        return self

    def with_pod_management_policy(self, policy: str) -> Builder:
        if not policy:
            return self._fail(
                "failed to build deployment: missing pod management policy"
            )
        self._obj.spec.pod_management_policy = policy
        return self

    def with_annotations(self, annotations: dict[str, str]) -> Builder:
        """Merge ``annotations`` into the existing ones."""
        if not annotations:
            return self._fail("failed to build deployment object: missing annotations")
        if self._obj.annotations is None:
            return self.with_annotations_new(annotations)
        self._obj.annotations.update(annotations)
        return self

    def with_annotations_new(self, annotations: dict[str, str]) -> Builder:
        """Replace the annotations with a copy of ``annotations``."""
        if not annotations:
            return self._fail("failed to build deployment object: no new annotations")
        self._obj.annotations = dict(annotations)
        return self

    def with_node_selector(self, selector: dict[str, str]) -> Builder:
        """Merge ``selector`` into the pod node selector."""
        if not selector:
            return self._fail("failed to build deployment object: no node selector")
        if self._obj.spec.node_selector is None:
            return self.with_node_selector_new(selector)
        self._obj.spec.node_selector.update(selector)
        return self

    def with_node_selector_new(self, selector: dict[str, str]) -> Builder:
        """Replace the pod node selector."""
        if not selector:
            return self._fail(
                "failed to build deployment object: no new node selector"
            )
        self._obj.spec.node_selector = dict(selector)
        return self

    def with_owner_reference_new(self, owner_references: list[Any]) -> Builder:
        """Replace the owner references."""
        if not owner_references:
            return self._fail(
                "failed to build deployment object: no new ownerRefernce"
            )
        self._obj.owner_references = list(owner_references)
        return self

    def with_labels(self, labels: dict[str, str]) -> Builder:
        """Merge ``labels`` into the existing ones."""
        if not labels:
            return self._fail("failed to build deployment object: missing labels")
        if self._obj.labels is None:
            return self.with_labels_new(labels)
        self._obj.labels.update(labels)
        return self

    def with_labels_new(self, labels: dict[str, str]) -> Builder:
        """Replace the labels with a copy of ``labels``."""
        if not labels:
            return self._fail("failed to build deployment object: no new labels")
        self._obj.labels = dict(labels)
        return self

    def with_selector_match_labels(self, match_labels: dict[str, str]) -> Builder:
        """Merge ``match_labels`` into the selector."""
        if not match_labels:
            return self._fail("failed to build deployment object: missing matchlabels")
        if self._obj.spec.selector_match_labels is None:
            return self.with_selector_match_labels_new(match_labels)
        self._obj.spec.selector_match_labels.update(match_labels)
        return self

    def with_selector_match_labels_new(self, match_labels: dict[str, str]) -> Builder:
        """Replace the selector with one matching a copy of ``match_labels``."""
        if not match_labels:
            return self._fail(
                "failed to build deployment object: no new matchlabels"
            )
        self._obj.spec.selector_match_labels = dict(match_labels)
        return self

    def with_replicas(self, replicas: int | None) -> Builder:
        if replicas is None:
            return self._fail("failed to build deployment object: nil replicas")
        if replicas < 0:
            return self._fail(
                f"failed to build deployment object: invalid replicas {{{replicas}}}"
            )
        self._obj.spec.replicas = replicas
        return self

    def with_strategy_type(self, strategy_type: str) -> Builder:
        if not strategy_type:
            return self._fail(
                "failed to build deployment object: missing strategytype"
            )
        self._obj.spec.update_strategy_type = strategy_type
        return self

    def add_check(self, predicate: Predicate) -> Builder:
        """Add a condition to validate against the statefulset."""
        self.checks.append(predicate)
        return self

    def add_checks(self, predicates: Iterable[Predicate]) -> Builder:
        """Add several conditions to validate against the statefulset."""
        for predicate in predicates:
            self.add_check(predicate)
        return self

    def build(self) -> StatefulSetObject:
        """Return the built object, or raise if any step failed."""
        if self.errors:
            raise StatefulSetBuildError(
                f"failed to build a deployment: {self._obj.name}: "
                f"failed to validate: build errors were found: [{'; '.join(self.errors)}]"
            )
        return self._obj