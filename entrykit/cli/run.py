import logging
import os
from pathlib import Path
from typing import Annotated, Optional, List

import typer

from entrykit.cli.common import entrykit_command
from entrykit.config.settings import StartupSettings
from entrykit.startup import run_startup

log = logging.getLogger(__name__)


@entrykit_command("Startup failed")
def run(
    command: Annotated[
        Optional[List[str]],
        typer.Argument(
            show_default=False,
            help="The command and arguments to start once startup succeeded. Separate it from options with `--`.",
        ),
    ] = None,
    services: Annotated[
        Optional[str],
        typer.Option(
            show_default=False,
            help="Whitespace separated `host:port` or URL targets to wait for. Overrides `SERVICES`.",
            rich_help_panel="Readiness",
        ),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option(
            show_default=False,
            help="Seconds to wait for each service. Overrides `TIMEOUT`, defaults to 60.",
            rich_help_panel="Readiness",
        ),
    ] = None,
    interval: Annotated[
        Optional[float],
        typer.Option(show_default=False, help="Seconds between connection attempts.", rich_help_panel="Readiness"),
    ] = None,
    attempt_timeout: Annotated[
        Optional[float],
        typer.Option(
            show_default=False, help="Upper bound in seconds for a single connection attempt.", rich_help_panel="Readiness"
        ),
    ] = None,
    root: Annotated[
        Optional[Path],
        typer.Option(
            show_default=False,
            file_okay=False,
            dir_okay=True,
            help="Directory whose files get placeholders substituted. Overrides `ENTRYKIT_ROOT`, defaults to the "
            "home directory.",
            rich_help_panel="Configuration",
        ),
    ] = None,
    separator: Annotated[
        Optional[str],
        typer.Option(
            show_default=False,
            help="Separator between key and value in binding variables. Defaults to `;`.",
            rich_help_panel="Configuration",
        ),
    ] = None,
    materialize: Annotated[
        Optional[bool],
        typer.Option(
            "--materialize/--no-materialize",
            show_default=False,
            help="Enable or disable placeholder substitution.",
            rich_help_panel="Configuration",
        ),
    ] = None,
    expand: Annotated[
        bool,
        typer.Option(help="Expand `$VAR` references in the command before starting it."),
    ] = True,
) -> None:
    """Substitutes configuration placeholders, waits for services and starts the command

    \b
    Every environment variable whose value has the form `key;value` replaces `${key}` with `value` in all files
    under the configuration root. Services listed in `SERVICES` are then checked one after another, each with its
    own `TIMEOUT`. Once all of them accept connections the command replaces this process.

    \b
    If a service does not become ready in time, the command is not started and the process exits with code 124.
    """
    environ = dict(os.environ)
    settings = StartupSettings.from_environ(
        environ,
        services=services,
        timeout=timeout,
        interval=interval,
        attempt_timeout=attempt_timeout,
        root=root,
        separator=separator,
        materialize=materialize,
    )
    run_startup(settings, environ, command=command or [], expand=expand)
