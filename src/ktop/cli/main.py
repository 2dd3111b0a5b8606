# src/ktop/cli/main.py
"""
This module is the main entry point for the ktop CLI.
"""

import logging

import typer

from ..core.config import config
from . import report

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="ktop",
    help="Display node capacity and pod metrics. Pods tolerating spot nodes are flagged.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command()(report.report)


if __name__ == "__main__":
    app()
