from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence
from urllib.parse import urlparse

from kubelet_observer.core.exceptions import MappingError
from kubelet_observer.core.models.instances import ServiceInstance, ServiceInstances
from kubelet_observer.core.models.snapshot import Container, ContainerStatus, Pod, Snapshot

logger = logging.getLogger("kubelet_observer")

Clock = Callable[[], datetime]

POD_NAME_DIMENSION = "kubernetes_pod_name"
NAMESPACE_DIMENSION = "kubernetes_namespace"
CONTAINER_NAME_DIMENSION = "container_spec_name"
RESERVED_DIMENSIONS = (POD_NAME_DIMENSION, NAMESPACE_DIMENSION, CONTAINER_NAME_DIMENSION)


def now() -> datetime:
    return datetime.now(timezone.utc)


def pod_key(pod: Pod) -> str:
    # NOTE: Static pods mirrored from a manifest always get an uid, so the fallback should be rare
    return pod.uid or f"{pod.namespace}/{pod.name}"


def instance_id(pod: Pod, container: Container, port: int) -> str:
    return f"{pod_key(pod)}-{container.name}-{port}"


class InstanceMapper:
    """
    Maps a kubelet snapshot into the service instances that can be discovered on it.

    Every declared port of every running container becomes one instance.
    The clock is injected, so that the same snapshot always maps into the same instances.
    """

    def __init__(self, host_url: str, clock: Clock = now) -> None:
        self.host_url = host_url
        self.default_host = urlparse(host_url).hostname
        self.clock = clock

    def map(self, existing_instances: Optional[Sequence[ServiceInstance]], snapshot: Snapshot) -> ServiceInstances:
        """Build the current service instances.

        Args:
            existing_instances: The instances discovered in the previous cycle.
                They are not merged: an instance that is absent from the snapshot is dropped.
            snapshot: The decoded kubelet snapshot.

        Returns:
            The instances in pod, container and port order. Empty if nothing is running.

        Raises:
            MappingError: If the snapshot can not be mapped into consistent instances.
        """

        if existing_instances:
            logger.debug(f"Replacing {len(existing_instances)} previously discovered instances")

        discovered = self.clock()
        instances: ServiceInstances = []
        seen: dict[str, Pod] = {}

        for pod in snapshot.pods:
            host: Optional[str] = None

            for container in pod.containers:
                status = pod.get_container_status(container.name)
                if status is None or not status.running:
                    logger.debug(f"Skipping container {container.name} of pod {pod}: not running")
                    continue

                if not container.ports:
                    logger.debug(f"Skipping container {container.name} of pod {pod}: no declared ports")
                    continue

                # NOTE: The host is only needed once a pod yields an instance
                if host is None:
                    host = self._resolve_host(pod)

                for instance in self._map_container(pod, container, status, host, discovered):
                    if instance.id in seen:
                        raise MappingError(
                            f"Instance id {instance.id} is produced by both pod {seen[instance.id]} and pod {pod}"
                        )
                    seen[instance.id] = pod
                    instances.append(instance)

        logger.debug(f"Mapped {len(snapshot.pods)} pods into {len(instances)} service instances")
        return instances

    def _resolve_host(self, pod: Pod) -> str:
        host = pod.status.pod_ip or self.default_host
        if not host:
            raise MappingError(f"Could not resolve a host for pod {pod}: it has no IP and {self.host_url} has no host")
        return host

    def _dimensions(self, pod: Pod, container: Container) -> dict[str, str]:
        dimensions = dict(pod.labels)
        dimensions.update(
            {
                POD_NAME_DIMENSION: pod.name,
                NAMESPACE_DIMENSION: pod.namespace,
                CONTAINER_NAME_DIMENSION: container.name,
            }
        )
        return dimensions

    def _map_container(
        self, pod: Pod, container: Container, status: ContainerStatus, host: str, discovered: datetime
    ) -> list[ServiceInstance]:
        instances: list[ServiceInstance] = []
        ports: set[int] = set()

        for port in container.ports:
            if port.container_port in ports:
                logger.debug(f"Port {port.container_port} is declared more than once in {pod}/{container.name}")
                continue
            ports.add(port.container_port)

            instances.append(
                ServiceInstance(
                    id=instance_id(pod, container, port.container_port),
                    host=host,
                    port=port.container_port,
                    port_name=port.name,
                    protocol=port.protocol,
                    pod_name=pod.name,
                    pod_uid=pod.uid,
                    namespace=pod.namespace,
                    container_name=container.name,
                    container_id=status.container_id,
                    image=status.image or container.image,
                    dimensions=self._dimensions(pod, container),
                    discovered=discovered,
                )
            )

        return instances
