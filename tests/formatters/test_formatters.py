import importlib.util
import io
import json
from pathlib import Path

import pytest
import yaml
from rich.console import Console

from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.models.result import Result

from ..conftest import HOST_URL

EXAMPLES = Path(__file__).parents[2] / "examples"


@pytest.fixture
def result(expected_instances) -> Result:
    return Result(instances=expected_instances, hosturl=HOST_URL)


def render(renderable) -> str:
    output = io.StringIO()
    Console(file=output, width=250).print(renderable)
    return output.getvalue()


def test_available_formatters():
    assert {"json", "yaml", "pprint", "table"} <= set(formatters.list_available())


def test_unknown_formatter():
    with pytest.raises(ValueError) as exc_info:
        formatters.find("unknown")

    message = str(exc_info.value)
    assert "Unknown instance formatter 'unknown'" in message
    assert all(name in message for name in ("json", "pprint", "table", "yaml"))


def test_duplicate_formatter_name():
    @formatters.register("instance-ids")
    def instance_ids(result: Result) -> str:
        return "\n".join(instance.id for instance in result.instances)

    try:
        with pytest.raises(ValueError, match="instance-ids"):

            @formatters.register("instance-ids")
            def other_instance_ids(result: Result) -> str:
                return ""

        assert formatters.find("instance-ids") is instance_ids
        assert formatters.register("instance-ids")(instance_ids) is instance_ids
    finally:
        formatters.FORMATTERS_REGISTRY.pop("instance-ids")



def test_json(result: Result):
    data = json.loads(result.format("json"))

    assert data["hosturl"] == HOST_URL
    assert [instance["id"] for instance in data["instances"]] == [
        "f6db8c8a-8c1b-11e6-9b69-0800276f8f1e-redis-6379",
        "0b5d7d7e-8c1c-11e6-9b69-0800276f8f1e-nginx-80",
    ]
    assert data["instances"][0]["dimensions"]["app"] == "cache"
    assert data["instances"][0]["discovered"] == "2016-10-06T19:57:00Z"


def test_json_roundtrip(result: Result):
    assert Result.model_validate_json(result.format("json")) == result


def test_yaml(result: Result):
    data = yaml.safe_load(result.format("yaml"))

    assert [instance["host"] for instance in data["instances"]] == ["172.17.0.3", "172.17.0.4"]
    assert data["errors"] == []


def test_pprint(result: Result):
    formatted = result.format("pprint")

    assert "'container_name': 'redis'" in formatted
    assert "'port': 80" in formatted


def test_table(result: Result):
    formatter = formatters.find("table")
    assert formatters.is_rich(formatter)
    assert not formatters.is_rich(formatters.find("json"))

    output = render(result.format(formatter))

    assert "2 service instances discovered on http://192.168.99.100:10255" in output
    assert "172.17.0.3:6379 (redis)" in output
    assert "172.17.0.4:80" in output
    assert "app=cache" in output
    assert "kubernetes_pod_name" not in output


def test_table_empty():
    output = render(Result(instances=[], hosturl=HOST_URL).format("table"))

    assert "0 service instances discovered" in output


def test_custom_formatter(result: Result):
    @formatters.register("instance-count")
    def instance_count(result: Result) -> str:
        return str(len(result.instances))

    try:
        assert formatters.find("instance-count") is instance_count
        assert result.format("instance-count") == "2"
    finally:
        formatters.FORMATTERS_REGISTRY.pop("instance-count")


def test_example_formatter(result: Result):
    spec = importlib.util.spec_from_file_location("custom_formatter", EXAMPLES / "custom_formatter.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    try:
        assert result.format("endpoints") == "172.17.0.3:6379\n172.17.0.4:80"
    finally:
        formatters.FORMATTERS_REGISTRY.pop("endpoints")
