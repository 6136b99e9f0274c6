import logging

import typer
from rich.console import Console
from rich.highlighter import NullHighlighter
from rich.logging import RichHandler
from rich.theme import Theme

default_theme = Theme(
    {
        "info": "bright_blue",
        "error": "bright_red",
        "success": "green3",
        "quiet": "bright_black",
    }
)

stdout_console = Console(theme=default_theme)
stderr_console = Console(stderr=True, theme=default_theme)


def verbosity_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the --verbose and --quiet flags to a log level"""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.INFO


def init_logging(log_level: str | int = logging.INFO, console: Console = stderr_console) -> None:
    """Initialize logging for the entrykit CLI

    Records go to stderr so the handed-off process keeps stdout to itself. Log messages carry keys and values taken
    straight from the environment, so they are printed as plain text: rich markup and highlighting are off. When the
    console is not a terminal, as under a container runtime that stamps every line itself, the time column is left
    out.

    :param log_level: The log level to use
    :param console: The console to write records to
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
    debug = log_level == logging.DEBUG

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                markup=False,
                highlighter=NullHighlighter(),
                show_time=console.is_terminal,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[typer],
                tracebacks_max_frames=20 if debug else 0,
                tracebacks_show_locals=debug,
            ),
        ],
    )
