import json

import yaml as yaml_module

from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.models.result import Result


@formatters.register()
def yaml(result: Result) -> str:
    return yaml_module.dump(json.loads(result.model_dump_json()), sort_keys=False)
