import os
from pathlib import Path
from typing import Annotated, Optional

import typer

from entrykit.cli.common import entrykit_command
from entrykit.config.settings import StartupSettings
from entrykit.log import stderr_console
from entrykit.materialize.apply import materialize as materialize_tree


@entrykit_command("Placeholder substitution failed")
def materialize(
    root: Annotated[
        Optional[Path],
        typer.Option(
            show_default=False,
            file_okay=False,
            dir_okay=True,
            help="Directory whose files get placeholders substituted. Overrides `ENTRYKIT_ROOT`, defaults to the "
            "home directory.",
        ),
    ] = None,
    separator: Annotated[
        Optional[str],
        typer.Option(show_default=False, help="Separator between key and value in binding variables."),
    ] = None,
) -> None:
    """Substitutes `${key}` placeholders in configuration files using `key;value` environment variables"""
    environ = dict(os.environ)
    settings = StartupSettings.from_environ(environ, root=root, separator=separator)
    changed = materialize_tree(settings.root, environ, settings.separator)

    stderr_console.print(f"✅ Updated {len(changed)} file(s) under {settings.root}", style="success")
