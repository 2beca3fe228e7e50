from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional

import pydantic as pd


def _freeze(value: dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(value)


# NOTE: Read-only mappings, serialized back into plain dicts
Labels = Annotated[dict[str, str], pd.AfterValidator(_freeze), pd.PlainSerializer(dict, return_type=dict[str, str])]
StateDetail = Annotated[
    dict[str, Any], pd.AfterValidator(_freeze), pd.PlainSerializer(dict, return_type=dict[str, Any])
]


class StateKind(str, enum.Enum):
    """
    The lifecycle state of a container, as reported by the kubelet.
    """

    WAITING = "waiting"
    RUNNING = "running"
    TERMINATED = "terminated"


class SnapshotModel(pd.BaseModel):
    model_config = pd.ConfigDict(frozen=True, populate_by_name=True)

    # NOTE: The kubelet sometimes sends explicit nulls for empty lists and maps.
    #       Those are treated the same way as a missing field.
    @pd.field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: pd.ValidationInfo) -> Any:
        field = cls.model_fields[info.field_name]
        if value is None and not field.is_required():
            return field.get_default(call_default_factory=True)
        return value


class ContainerState(SnapshotModel):
    """
    One of the waiting, running or terminated states, with its opaque details.

    On the wire the state is a mapping with exactly one key, for example `{"running": {"startedAt": "..."}}`.
    That mapping is decoded by `ContainerStatus`, and serialized back into the same shape from here.
    The details are exposed as a read-only mapping.
    """

    kind: StateKind
    detail: StateDetail = pd.Field(default_factory=dict, validate_default=True)

    @pd.model_serializer
    def _to_wire(self) -> dict[str, Any]:
        return {self.kind.value: dict(self.detail)}

    @property
    def running(self) -> bool:
        return self.kind == StateKind.RUNNING


class ContainerPort(SnapshotModel):
    container_port: int = pd.Field(alias="containerPort", gt=0, lt=65536)
    name: Optional[str] = None
    protocol: str = "TCP"


class Container(SnapshotModel):
    name: str = pd.Field(min_length=1)
    image: str = ""
    ports: tuple[ContainerPort, ...] = ()


class ContainerStatus(SnapshotModel):
    name: str = pd.Field(min_length=1)
    state: Optional[ContainerState] = None
    ready: bool = False
    restart_count: int = pd.Field(0, alias="restartCount", ge=0)
    image: str = ""
    container_id: str = pd.Field("", alias="containerID")

    @pd.field_validator("state", mode="before")
    @classmethod
    def _state_from_wire(cls, value: Any) -> Any:
        if value is None or isinstance(value, ContainerState):
            return value

        if not isinstance(value, dict):
            raise ValueError(f"container state must be a mapping, got {type(value).__name__}")

        # NOTE: An empty state means that the kubelet has not reported one yet
        if not value:
            return None

        if len(value) != 1:
            raise ValueError(
                f"container state must have exactly one of {', '.join(kind.value for kind in StateKind)}, "
                f"got {sorted(value)}"
            )

        ((key, detail),) = value.items()
        try:
            kind = StateKind(key)
        except ValueError:
            raise ValueError(f"unknown container state {key!r}") from None

        if detail is None:
            detail = {}
        if not isinstance(detail, dict):
            raise ValueError(f"details of the {key} state must be a mapping, got {type(detail).__name__}")

        return ContainerState(kind=kind, detail=detail)

    @property
    def running(self) -> bool:
        return self.state is not None and self.state.running


class PodMetadata(SnapshotModel):
    name: str = pd.Field(min_length=1)
    namespace: str = ""
    uid: str = ""
    labels: Labels = pd.Field(default_factory=dict, validate_default=True)


class PodSpec(SnapshotModel):
    containers: tuple[Container, ...] = ()
    node_name: str = pd.Field("", alias="nodeName")


class PodStatus(SnapshotModel):
    phase: str = ""
    pod_ip: str = pd.Field("", alias="podIP")
    host_ip: str = pd.Field("", alias="hostIP")
    container_statuses: tuple[ContainerStatus, ...] = pd.Field((), alias="containerStatuses")


class Pod(SnapshotModel):
    metadata: PodMetadata
    spec: PodSpec = pd.Field(default_factory=PodSpec)
    status: PodStatus = pd.Field(default_factory=PodStatus)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def uid(self) -> str:
        return self.metadata.uid

    @property
    def labels(self) -> Mapping[str, str]:
        return self.metadata.labels

    @property
    def containers(self) -> tuple[Container, ...]:
        return self.spec.containers

    @property
    def container_statuses(self) -> tuple[ContainerStatus, ...]:
        return self.status.container_statuses

    def get_container_status(self, container_name: str) -> Optional[ContainerStatus]:
        return next((status for status in self.container_statuses if status.name == container_name), None)


class Snapshot(SnapshotModel):
    """
    The pods known to a kubelet at one poll instant, in the order the kubelet listed them.
    """

    items: tuple[Pod, ...] = ()

    @property
    def pods(self) -> tuple[Pod, ...]:
        return self.items
