from __future__ import annotations

from datetime import datetime
from typing import Optional

import pydantic as pd


class ServiceInstance(pd.BaseModel):
    model_config = pd.ConfigDict(frozen=True)

    id: str
    host: str
    port: int
    port_name: Optional[str] = None
    protocol: str = "TCP"
    pod_name: str
    pod_uid: str = ""
    namespace: str = ""
    container_name: str
    container_id: str = ""
    image: str = ""
    dimensions: dict[str, str] = pd.Field(default_factory=dict)
    discovered: datetime

    def __str__(self) -> str:
        return f"{self.id} ({self.host}:{self.port})"

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"


ServiceInstances = list[ServiceInstance]
