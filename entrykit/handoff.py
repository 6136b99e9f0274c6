import logging
import os
import re
import shlex
from typing import Mapping, NoReturn

from entrykit.const import EXIT_COMMAND_NOT_FOUND, EXIT_COMMAND_NOT_EXECUTABLE
from entrykit.error import EntrykitCommandError, EntrykitConfigError

log = logging.getLogger(__name__)

REGEX_VARIABLE_REFERENCE = re.compile(r"\$(?:(?P<name>[A-Za-z_][A-Za-z0-9_]*)|\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)\})")


def expand_variables(value: str, environ: Mapping[str, str]) -> str:
    """Replace ``$NAME`` and ``${NAME}`` with values from environ, leaving unknown names as they are"""

    def replace(match: re.Match) -> str:
        name = match.group("name") or match.group("braced")
        return environ.get(name, match.group(0))

    return REGEX_VARIABLE_REFERENCE.sub(replace, value)


def expand_command(args: list[str], environ: Mapping[str, str]) -> list[str]:
    """Expand variable references in command arguments

    An argument that changes during expansion is split into words, so a variable holding several options (such as
    ``${JAVA_OPTS}``) turns into several arguments. An argument that expands to nothing is dropped. Arguments without
    a known variable reference are passed through verbatim.

    :param args: The command and its arguments
    :param environ: The environment to take variable values from
    """
    expanded: list[str] = []
    for arg in args:
        value = expand_variables(arg, environ)
        if value == arg:
            expanded.append(arg)
            continue
        try:
            expanded.extend(shlex.split(value))
        except ValueError as e:
            raise EntrykitConfigError(f"Unable to split expanded argument '{value}': {e}", value=arg) from e
    return expanded


def exec_command(args: list[str], environ: Mapping[str, str]) -> NoReturn:
    """Replace the current process with the given command

    :param args: The command and its arguments
    :param environ: The environment for the new process
    :raises EntrykitCommandError: If there is no command or it cannot be executed
    """
    if not args:
        raise EntrykitCommandError("No command given to start", cmd=args, exit_code=EXIT_COMMAND_NOT_EXECUTABLE)

    log.info(f"Startup succeeded, starting {shlex.join(args)}")
    try:
        os.execvpe(args[0], args, dict(environ))
    except FileNotFoundError as e:
        raise EntrykitCommandError(
            f"Command '{args[0]}' not found", cmd=args, exit_code=EXIT_COMMAND_NOT_FOUND
        ) from e
    except OSError as e:
        raise EntrykitCommandError(
            f"Unable to execute '{args[0]}': {e.strerror}", cmd=args, exit_code=EXIT_COMMAND_NOT_EXECUTABLE
        ) from e
