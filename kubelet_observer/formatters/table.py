import itertools
from typing import Any

from rich.table import Table

from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.mapper import RESERVED_DIMENSIONS
from kubelet_observer.core.models.instances import ServiceInstance
from kubelet_observer.core.models.result import Result

NONE_LITERAL = "none"


def _format_labels(instance: ServiceInstance) -> str:
    labels = [f"{key}={value}" for key, value in instance.dimensions.items() if key not in RESERVED_DIMENSIONS]
    return "\n".join(labels) if labels else f"[dim]{NONE_LITERAL}[/dim]"


def _format_endpoint(instance: ServiceInstance) -> str:
    return instance.endpoint + (f" ({instance.port_name})" if instance.port_name else "")


@formatters.register(rich_console=True)
def table(result: Result) -> Table:
    """Format the result as a rich table, one row per service instance.

    Rows of the same pod are grouped, and the pod columns are only filled for the first row of a group.
    """

    table = Table(
        show_header=True,
        header_style="bold magenta",
        title=f"\n{len(result.instances)} service instances discovered on {result.hosturl}\n",
        title_justify="left",
        title_style="",
        caption=f"{len(result.errors)} errors" if result.errors else None,
    )

    table.add_column("Number", justify="right", no_wrap=True)
    table.add_column("Namespace", style="cyan")
    table.add_column("Pod", style="cyan")
    table.add_column("Labels", style="cyan")
    table.add_column("Container", style="cyan")
    table.add_column("Endpoint", no_wrap=True)
    table.add_column("Protocol")
    table.add_column("ID", style="dim")

    for _, group in itertools.groupby(
        enumerate(result.instances), key=lambda x: (x[1].namespace, x[1].pod_name, x[1].pod_uid)
    ):
        group_items = list(group)

        for j, (i, instance) in enumerate(group_items):
            last_row = j == len(group_items) - 1
            full_info_row = j == 0

            cells: list[Any] = [f"{i + 1}."]
            cells += [
                (instance.namespace or NONE_LITERAL) if full_info_row else "",
                instance.pod_name if full_info_row else "",
                _format_labels(instance) if full_info_row else "",
                instance.container_name,
                _format_endpoint(instance),
                instance.protocol,
                instance.id,
            ]

            table.add_row(*cells, end_section=last_row)

    return table
