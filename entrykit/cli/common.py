import functools
import inspect
import logging
from contextlib import contextmanager
from typing import Annotated

import typer

from entrykit.error import EntrykitError
from entrykit.log import init_logging, stderr_console, verbosity_level

log = logging.getLogger(__name__)

VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]
QuietOption = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress all output except errors.")]


@contextmanager
def exit_on_error(failure_message: str):
    """Convert entrykit errors raised inside the block into a CLI exit with the error's exit code

    :param failure_message: Summary line printed after the error details
    """
    try:
        yield
    except EntrykitError as e:
        log.debug("Startup step failed", exc_info=e)
        stderr_console.print(str(e).rstrip(), style="error", highlight=False, markup=False)
        stderr_console.print(f"❌ {failure_message}", style="error")
        raise typer.Exit(code=e.exit_code)


def entrykit_command(failure_message: str):
    """Decorate a CLI command with the --verbose/--quiet flags and entrykit error handling

    Logging is initialized from the flags before the command runs. Any EntrykitError the command raises is printed
    with failure_message and turned into an exit with the error's own exit code.

    :param failure_message: Summary line printed when the command fails
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, verbose: bool = False, quiet: bool = False, **kwargs):
            if verbose and quiet:
                raise typer.BadParameter("Cannot set both --verbose and --quiet flags.")
            init_logging(verbosity_level(verbose, quiet))
            with exit_on_error(failure_message):
                return fn(*args, **kwargs)

        # Typer reads the options from the signature, so expose the flags next to the command's own parameters
        signature = inspect.signature(fn)
        parameters = [
            *signature.parameters.values(),
            inspect.Parameter("verbose", inspect.Parameter.KEYWORD_ONLY, default=False, annotation=VerboseOption),
            inspect.Parameter("quiet", inspect.Parameter.KEYWORD_ONLY, default=False, annotation=QuietOption),
        ]
        wrapper.__signature__ = signature.replace(parameters=parameters)
        return wrapper

    return decorator
