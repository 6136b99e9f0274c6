import os
from typing import Union, List, TYPE_CHECKING

from entrykit.const import (
    EXIT_FILE_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_GATE_TIMEOUT,
    EXIT_COMMAND_NOT_EXECUTABLE,
)

if TYPE_CHECKING:
    from entrykit.config.target import DependencyTarget


class EntrykitError(Exception):
    """Base class for all entrykit exceptions"""

    exit_code: int = 1


class EntrykitConfigError(EntrykitError):
    """Error for invalid or malformed startup configuration"""

    exit_code = EXIT_CONFIG_ERROR

    def __init__(self, message: str = None, value: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.value = value


class EntrykitFileError(EntrykitError):
    """Generic error for file/directory issues"""

    exit_code = EXIT_FILE_ERROR

    def __init__(
        self,
        message: str = None,
        filepath: Union[str, bytes, os.PathLike] | List[Union[str, bytes, os.PathLike]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.filepath = filepath

        if filepath:
            filepath_note = f"Affected filepath(s): "
            if isinstance(filepath, (str, bytes, os.PathLike)):
                filepath_note += f"  - {filepath}\n"
            elif isinstance(filepath, list):
                for f in filepath:
                    filepath_note += f"  - {f}\n"
            self.add_note(filepath_note)


class EntrykitTimeoutError(EntrykitError):
    """Error for a dependency that did not become reachable in its window"""

    exit_code = EXIT_GATE_TIMEOUT

    def __init__(self, target: "DependencyTarget", timeout: float, elapsed: float | None = None) -> None:
        super().__init__(f"Timed out after {timeout:g}s waiting for service {target}")
        self.target = target
        self.timeout = timeout
        self.elapsed = elapsed

    def __str__(self) -> str:
        s = f"Timed out waiting for service {self.target}\n"
        s += f"  - Timeout: {self.timeout:g}s\n"
        if self.elapsed is not None:
            s += f"  - Elapsed: {self.elapsed:.1f}s\n"
        return s


class EntrykitCommandError(EntrykitError):
    """Error for a command that could not be handed off to"""

    def __init__(
        self,
        message: str = None,
        cmd: List[str] = None,
        exit_code: int = EXIT_COMMAND_NOT_EXECUTABLE,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cmd = cmd or []
        self.exit_code = exit_code

    def __str__(self) -> str:
        s = f"{self.message}\n"
        s += f"  - Exit code: {self.exit_code}\n"
        if self.cmd:
            s += f"  - Command: {' '.join(self.cmd)}\n"
        return s
