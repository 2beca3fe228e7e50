# This is an example on how to create your own custom formatter

from __future__ import annotations

import kubelet_observer
from kubelet_observer.api import formatters
from kubelet_observer.api.models import Result


# This is a custom formatter
# It will be available to the CLI as `endpoints`
# It prints one `host:port` line per discovered service instance
@formatters.register("endpoints")
def endpoints(result: Result) -> str:
    return "\n".join(instance.endpoint for instance in result.instances)


# Running this file will register the formatter and make it available to the CLI
# Run it as `python ./custom_formatter.py discover --hosturl http://127.0.0.1:10255 --formatter endpoints`
if __name__ == "__main__":
    kubelet_observer.run()
