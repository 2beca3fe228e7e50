"""
Decoding of the kubelet `/pods` document into an immutable `Snapshot`.
"""

from __future__ import annotations

import logging
from typing import Union

import pydantic as pd

from kubelet_observer.core.exceptions import DecodeError
from kubelet_observer.core.models.snapshot import Snapshot

logger = logging.getLogger("kubelet_observer")


def decode(raw: Union[bytes, str]) -> Snapshot:
    """Decode a raw kubelet pod list payload.

    Args:
        raw: The body returned by the kubelet pods endpoint.

    Returns:
        The decoded snapshot.

    Raises:
        DecodeError: If the payload is not valid JSON or does not match the pod list structure.
    """

    try:
        snapshot = Snapshot.model_validate_json(raw)
    except pd.ValidationError as e:
        errors = [
            {"loc": ".".join(str(part) for part in error["loc"]), "type": error["type"], "msg": error["msg"]}
            for error in e.errors(include_url=False, include_input=False)
        ]
        raise DecodeError(f"Could not decode kubelet pods payload: {e.error_count()} error(s)", errors) from e

    logger.debug(f"Decoded {len(snapshot.pods)} pods from kubelet payload")
    return snapshot


def encode(snapshot: Snapshot) -> str:
    """Encode a snapshot back into the kubelet pod list format."""

    return snapshot.model_dump_json(by_alias=True)


__all__ = ["decode", "encode"]
