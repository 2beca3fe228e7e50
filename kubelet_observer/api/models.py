from kubelet_observer.core.exceptions import DecodeError, KubeletRequestError, MappingError, ObserverError
from kubelet_observer.core.models.instances import ServiceInstance, ServiceInstances
from kubelet_observer.core.models.result import Result
from kubelet_observer.core.models.snapshot import (
    Container,
    ContainerPort,
    ContainerState,
    ContainerStatus,
    Pod,
    Snapshot,
    StateKind,
)

__all__ = [
    "Container",
    "ContainerPort",
    "ContainerState",
    "ContainerStatus",
    "Pod",
    "Snapshot",
    "StateKind",
    "ServiceInstance",
    "ServiceInstances",
    "Result",
    "ObserverError",
    "DecodeError",
    "MappingError",
    "KubeletRequestError",
]
