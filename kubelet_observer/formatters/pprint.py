from pprint import pformat

from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.models.result import Result


@formatters.register()
def pprint(result: Result) -> str:
    return pformat(result.model_dump())
