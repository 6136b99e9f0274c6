from enum import Enum


class GateStatusEnum(str, Enum):
    """Enum for the terminal result of a readiness gate run."""

    READY = "ready"
    TIMED_OUT = "timed_out"


APP_NAME = "entrykit"

ENV_SERVICES = "SERVICES"
ENV_TIMEOUT = "TIMEOUT"
ENV_ROOT = "ENTRYKIT_ROOT"
ENV_SEPARATOR = "ENTRYKIT_SEPARATOR"
ENV_INTERVAL = "ENTRYKIT_INTERVAL"
ENV_ATTEMPT_TIMEOUT = "ENTRYKIT_ATTEMPT_TIMEOUT"
ENV_MATERIALIZE = "ENTRYKIT_MATERIALIZE"

DEFAULT_TIMEOUT = 60.0
DEFAULT_INTERVAL = 1.0
DEFAULT_ATTEMPT_TIMEOUT = 7.0
DEFAULT_SEPARATOR = ";"

# Floor for the per-attempt timeout once the remaining budget gets small
MIN_ATTEMPT_TIMEOUT = 0.1

REGEX_BINDING_KEY_PATTERN = r"^[A-Za-z0-9_.\-]+$"

FALSY_VALUES = {"0", "false", "no", "off"}

EXIT_FILE_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_GATE_TIMEOUT = 124
EXIT_COMMAND_NOT_EXECUTABLE = 126
EXIT_COMMAND_NOT_FOUND = 127
