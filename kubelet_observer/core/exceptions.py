from __future__ import annotations

from typing import Any, Optional


class ObserverError(Exception):
    """
    Base class for all the errors raised by kubelet-observer.
    """

    pass


class DecodeError(ObserverError):
    """
    An exception raised when the kubelet pods payload is malformed or structurally incompatible.
    """

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class MappingError(ObserverError):
    """
    An exception raised when a decoded snapshot can not be mapped into a consistent set of service instances.
    """

    pass


class KubeletRequestError(ObserverError):
    """
    Exception, when the kubelet pods endpoint cannot be reached or returns an error
    """

    pass
