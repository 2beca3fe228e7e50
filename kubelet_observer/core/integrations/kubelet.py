from __future__ import annotations

import logging

import requests

from kubelet_observer.core.exceptions import KubeletRequestError

logger = logging.getLogger("kubelet_observer")

PODS_PATH = "/pods"


class KubeletClient:
    """Fetches the raw pod list from a kubelet. Retrying is left to the caller."""

    def __init__(self, hosturl: str, timeout: float = 5.0) -> None:
        self.hosturl = hosturl.removesuffix("/")
        self.timeout = timeout

    @property
    def pods_url(self) -> str:
        return f"{self.hosturl}{PODS_PATH}"

    def fetch_pods(self) -> bytes:
        logger.debug(f"Fetching pods from {self.pods_url}")
        try:
            response = requests.get(self.pods_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise KubeletRequestError(f"Could not fetch pods from {self.pods_url}: {e}") from e

        return response.content
