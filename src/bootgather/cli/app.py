# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from bootgather.config.models import GatherOptions
from bootgather.errors import GatherError
from bootgather.gather.bootstrap import gather_bootstrap
from bootgather.logging.log import init_logging
from bootgather.observers.dispatcher import EventBus
from bootgather.observers.jsonfile import JsonFileObserver
from bootgather.observers.logger import LoggerObserver

EVENTS_FILE_NAME = ".bootgather-events.jsonl"


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Diagnostics for failed cluster installations")

gather_app = typer.Typer(
    help=(
        "Gather debugging data for a given installation failure.\n\n"
        "When an installation fails, this collects the most relevant "
        "information from the cluster hosts to debug the failure."
    ),
    invoke_without_command=True,
)
app.add_typer(gather_app, name="gather")


@gather_app.callback(invoke_without_command=True)
def gather(ctx: typer.Context):
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@gather_app.command("bootstrap")
def gather_bootstrap_cmd(
    directory: Path = typer.Option(Path("."), "--dir", help="Installation directory"),
    bootstrap: str = typer.Option("", "--bootstrap", help="Hostname or IP of the bootstrap host"),
    masters: Optional[List[str]] = typer.Option(
        None,
        "--master",
        help="Hostname or IP of a control plane host (repeatable)",
    ),
    keys: Optional[List[Path]] = typer.Option(
        None,
        "--key",
        help=(
            "Path to an SSH private key to authenticate with (repeatable). "
            "If no key is provided, keys from the user's environment are used"
        ),
    ),
    connect_timeout: Optional[float] = typer.Option(None, "--connect-timeout", help="SSH connect timeout in seconds"),
    command_timeout: Optional[float] = typer.Option(None, "--command-timeout", help="Remote command timeout in seconds"),
    debug: bool = typer.Option(False, "--debug"),
):
    """
    Gather debugging data for a failing-to-bootstrap control plane.
    """
    logger, run_id, _ = init_logging(directory, verbose=debug)

    bus = EventBus(observers=[
        LoggerObserver(logger),
        JsonFileObserver(directory / EVENTS_FILE_NAME),
    ])

    options = GatherOptions(
        bootstrap=bootstrap,
        masters=list(masters or []),
        key_paths=list(keys or []),
        connect_timeout=connect_timeout,
        command_timeout=command_timeout,
    )

    try:
        gather_bootstrap(directory, options, bus=bus, run_id=run_id)
    except GatherError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
