# src/ktop/cli/report.py
"""
Implements the `ktop [NODE]` command.
"""

import asyncio
import logging
import sys
import threading
from typing import Optional

import typer
from rich.console import Console
from typing_extensions import Annotated

from ..collectors.node_collector import NodeCollector
from ..collectors.resource_sampler import ResourceSampler
from ..core.config import config
from ..core.errors import ReportErrors
from ..core.exceptions import KtopError
from ..core.k8s_client import load_cluster_config
from ..core.report import ReportDriver
from ..reporters.progress import ProgressNotifier, RichProgress
from ..reporters.table_renderer import TableRenderer

logger = logging.getLogger(__name__)


def version_callback(value: bool):
    """
    Prints the version of ktop.
    """
    if value:
        from .. import __version__

        typer.echo(f"ktop version: {__version__}")
        raise typer.Exit()


async def run_report(
    node: Optional[str] = None,
    colorize: bool = True,
    show_progress: bool = True,
    kubeconfig: Optional[str] = None,
    context: Optional[str] = None,
) -> ReportErrors:
    """Loads the cluster config, then runs one report to stdout."""
    await load_cluster_config(kubeconfig=kubeconfig, context=context)

    output_lock = threading.Lock()
    renderer = TableRenderer(console=Console(highlight=False), colorize=colorize, lock=output_lock)
    progress = RichProgress(console=Console(stderr=True), lock=output_lock) if show_progress else ProgressNotifier()

    driver = ReportDriver(
        node_collector=NodeCollector(),
        sampler=ResourceSampler(progress=progress),
        renderer=renderer,
    )
    try:
        return await driver.run(node_name=node)
    finally:
        await driver.close()


def report(
    node: Annotated[
        Optional[str],
        typer.Argument(help="Node name. Shows every pod on that node; omit to summarize all nodes."),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Do not shade every other row.")] = False,
    no_progress: Annotated[bool, typer.Option("--no-progress", help="Hide the progress bar.")] = False,
    kubeconfig: Annotated[Optional[str], typer.Option("--kubeconfig", help="Path to a kubeconfig file.")] = None,
    context: Annotated[Optional[str], typer.Option("--context", help="Kubeconfig context to use.")] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
):
    """
    Display node capacity and pod metrics.

    Examples: `ktop` shows all nodes, `ktop my-node` shows the pods of my-node.
    """
    colorize = not (no_color or config.NO_COLOR)
    show_progress = not no_progress and sys.stderr.isatty()

    try:
        errors = asyncio.run(
            run_report(
                node=node,
                colorize=colorize,
                show_progress=show_progress,
                kubeconfig=kubeconfig,
                context=context,
            )
        )
    except KtopError as e:
        logger.debug("Report aborted.", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if errors:
        logger.info("Report finished with %d error(s).", len(errors))
