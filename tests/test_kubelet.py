from unittest.mock import Mock, patch

import pytest
import requests

from kubelet_observer.core.exceptions import KubeletRequestError
from kubelet_observer.core.integrations.kubelet import KubeletClient


def test_pods_url():
    assert KubeletClient("https://10.0.0.1:10250/").pods_url == "https://10.0.0.1:10250/pods"


def test_fetch_pods():
    response = Mock(content=b'{"items": []}')

    with patch("kubelet_observer.core.integrations.kubelet.requests.get", return_value=response) as get:
        assert KubeletClient("http://10.0.0.1:10255", timeout=2).fetch_pods() == b'{"items": []}'

    get.assert_called_once_with("http://10.0.0.1:10255/pods", timeout=2)
    response.raise_for_status.assert_called_once_with()


def test_fetch_pods_http_error():
    response = Mock()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("401 Client Error: Unauthorized")

    with patch("kubelet_observer.core.integrations.kubelet.requests.get", return_value=response):
        with pytest.raises(KubeletRequestError) as exc_info:
            KubeletClient("http://10.0.0.1:10255").fetch_pods()

    assert isinstance(exc_info.value.__cause__, requests.exceptions.HTTPError)
