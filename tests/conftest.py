import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pydantic as pd
import pytest

from kubelet_observer import formatters as concrete_formatters  # noqa: F401
from kubelet_observer.core.mapper import InstanceMapper
from kubelet_observer.core.models import config as config_module
from kubelet_observer.core.models.config import Config
from kubelet_observer.core.models.instances import ServiceInstance

TESTDATA = Path(__file__).parent / "testdata"
FIXED_TIME = datetime(2016, 10, 6, 19, 57, tzinfo=timezone.utc)
HOST_URL = "http://192.168.99.100:10255"


def fixed_clock() -> datetime:
    return FIXED_TIME


@pytest.fixture
def pods_json() -> bytes:
    return (TESTDATA / "pods.json").read_bytes()


@pytest.fixture
def pods_document(pods_json: bytes) -> dict[str, Any]:
    """The pods document as plain data, to be altered by the tests before encoding it again."""
    return json.loads(pods_json)


@pytest.fixture
def expected_instances() -> list[ServiceInstance]:
    return pd.TypeAdapter(list[ServiceInstance]).validate_json((TESTDATA / "2-discovered.json").read_bytes())


@pytest.fixture
def mapper() -> InstanceMapper:
    return InstanceMapper(HOST_URL, clock=fixed_clock)


@pytest.fixture
def make_config():
    def _make_config(**kwargs: Any) -> Config:
        config = Config(**{"hosturl": HOST_URL, "quiet": True, **kwargs})
        Config.set_config(config)
        return config

    return _make_config


@pytest.fixture(autouse=True)
def reset_config():
    yield
    config_module._config = None
