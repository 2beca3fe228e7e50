from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.models.result import Result


@formatters.register()
def json(result: Result) -> str:
    return result.model_dump_json(indent=2)
