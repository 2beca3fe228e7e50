from __future__ import annotations

from typing import Any, Optional, Union

import pydantic as pd

from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.models.instances import ServiceInstance


class Result(pd.BaseModel):
    instances: list[ServiceInstance]
    hosturl: Optional[str] = None
    errors: list[dict[str, Any]] = pd.Field(default_factory=list)

    def format(self, formatter: Union[formatters.FormatterFunc, str]) -> Any:
        """Format the result.

        Args:
            formatter: The formatter to use.

        Returns:
            The formatted result.
        """

        formatter = formatters.find(formatter) if isinstance(formatter, str) else formatter
        return formatter(self)

