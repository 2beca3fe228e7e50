from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from pydantic import ValidationError

from kubelet_observer import formatters as concrete_formatters  # noqa: F401
from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.models.config import Config
from kubelet_observer.core.runner import Runner
from kubelet_observer.utils.version import get_version

app = typer.Typer(
    pretty_exceptions_show_locals=False,
    pretty_exceptions_short=True,
    no_args_is_help=True,
    help="Discover service instances from the pods running on a kubelet.",
)

logger = logging.getLogger("kubelet_observer")


@app.command(rich_help_panel="Utils")
def version() -> None:
    typer.echo(get_version())


@app.command(rich_help_panel="Discovery")
def discover(
    hosturl: str = typer.Option(
        ...,
        "--hosturl",
        "-u",
        envvar="KUBELET_OBSERVER_HOSTURL",
        help="Base URL of the kubelet, e.g. http://10.0.0.1:10255. Pods are read from its /pods endpoint.",
        rich_help_panel="Kubelet Settings",
    ),
    request_timeout: float = typer.Option(
        5.0,
        "--timeout",
        help="Timeout in seconds for the request to the kubelet.",
        rich_help_panel="Kubelet Settings",
    ),
    file_input: Optional[str] = typer.Option(
        None,
        "--file",
        help="Read the pods document from this file instead of the kubelet. --hosturl is still used for the host of pods without an IP.",
        rich_help_panel="Kubelet Settings",
    ),
    format: str = typer.Option(
        "table",
        "--formatter",
        "-f",
        help=f"Output formatter ({', '.join(formatters.list_available())})",
        rich_help_panel="Logging Settings",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode", rich_help_panel="Logging Settings"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Enable quiet mode", rich_help_panel="Logging Settings"),
    log_to_stderr: bool = typer.Option(
        False, "--logtostderr", help="Pass logs to stderr", rich_help_panel="Logging Settings"
    ),
    width: Optional[int] = typer.Option(
        None,
        "--width",
        help="Width of the output. Will use console width by default.",
        rich_help_panel="Logging Settings",
    ),
    file_output: Optional[str] = typer.Option(
        None,
        "--fileoutput",
        help="Filename to write output to (if not specified, file output is disabled)",
        rich_help_panel="Output Settings",
    ),
) -> None:
    """Run one discovery cycle against a kubelet and print the discovered service instances"""
    try:
        config = Config(
            hosturl=hosturl,
            request_timeout=request_timeout,
            file_input=file_input,
            format=format,
            verbose=verbose,
            quiet=quiet,
            log_to_stderr=log_to_stderr,
            width=width,
            file_output=file_output,
        )
        Config.set_config(config)
    except ValidationError:
        logger.exception("Error occured while parsing arguments")
        raise typer.Exit(code=2)
    else:
        runner = Runner()
        exit_code = asyncio.run(runner.run())
        raise typer.Exit(code=exit_code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
