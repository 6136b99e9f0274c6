import typer

from entrykit import __version__
from entrykit.log import stdout_console


def version():
    """Display the version of entrykit"""
    stdout_console.print(f"entrykit v{__version__}", highlight=False)
    raise typer.Exit()
