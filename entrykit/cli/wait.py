import os
from typing import Annotated, Optional, List

import typer

from entrykit.cli.common import entrykit_command
from entrykit.config.settings import StartupSettings
from entrykit.log import stderr_console
from entrykit.startup import run_gate


@entrykit_command("Services not ready")
def wait(
    targets: Annotated[
        Optional[List[str]],
        typer.Argument(
            show_default=False, help="`host:port` or URL targets to wait for. Defaults to the `SERVICES` variable."
        ),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option(show_default=False, help="Seconds to wait for each target. Overrides `TIMEOUT`, defaults to 60."),
    ] = None,
    interval: Annotated[
        Optional[float],
        typer.Option(show_default=False, help="Seconds between connection attempts."),
    ] = None,
    attempt_timeout: Annotated[
        Optional[float],
        typer.Option(show_default=False, help="Upper bound in seconds for a single connection attempt."),
    ] = None,
) -> None:
    """Waits until every target accepts connections, each within its own timeout"""
    settings = StartupSettings.from_environ(
        os.environ,
        services=" ".join(targets) if targets else None,
        timeout=timeout,
        interval=interval,
        attempt_timeout=attempt_timeout,
        materialize=False,
        bindings=[],
    )
    outcome = run_gate(settings)

    stderr_console.print(f"✅ All services ready after {outcome.elapsed:.1f}s", style="success")
