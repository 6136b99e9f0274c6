import logging
from pathlib import Path
from typing import Annotated, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from entrykit.config.target import DependencyTarget, parse_targets
from entrykit.const import (
    ENV_SERVICES,
    ENV_TIMEOUT,
    ENV_ROOT,
    ENV_SEPARATOR,
    ENV_INTERVAL,
    ENV_ATTEMPT_TIMEOUT,
    ENV_MATERIALIZE,
    DEFAULT_TIMEOUT,
    DEFAULT_INTERVAL,
    DEFAULT_ATTEMPT_TIMEOUT,
    DEFAULT_SEPARATOR,
    FALSY_VALUES,
)
from entrykit.error import EntrykitConfigError
from entrykit.materialize.bindings import Binding, derive_bindings

log = logging.getLogger(__name__)

# Environment variable name for each settings field read from the environment
ENVIRONMENT_FIELDS = {
    "services": ENV_SERVICES,
    "timeout": ENV_TIMEOUT,
    "root": ENV_ROOT,
    "separator": ENV_SEPARATOR,
    "interval": ENV_INTERVAL,
    "attempt_timeout": ENV_ATTEMPT_TIMEOUT,
    "materialize": ENV_MATERIALIZE,
}


class StartupSettings(BaseModel):
    """Settings for a single startup run."""

    model_config = ConfigDict(frozen=True)

    services: Annotated[list[DependencyTarget], Field(default_factory=list)]
    timeout: Annotated[float, Field(default=DEFAULT_TIMEOUT, gt=0)]
    root: Annotated[Path, Field(default_factory=lambda: Path.home())]
    separator: Annotated[str, Field(default=DEFAULT_SEPARATOR, min_length=1, max_length=1)]
    interval: Annotated[float, Field(default=DEFAULT_INTERVAL, gt=0)]
    attempt_timeout: Annotated[float, Field(default=DEFAULT_ATTEMPT_TIMEOUT, gt=0)]
    materialize: Annotated[bool, Field(default=True)]
    bindings: Annotated[list[Binding], Field(default_factory=list)]

    @field_validator("services", mode="before")
    @classmethod
    def parse_services(cls, value: Any) -> Any:
        """Accept the raw whitespace separated SERVICES string."""
        if isinstance(value, str):
            return parse_targets(value)
        return value

    @field_validator("materialize", mode="before")
    @classmethod
    def parse_materialize(cls, value: Any) -> Any:
        """Accept common false-like strings to disable the materializer."""
        return _parse_enabled(value)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str], **overrides) -> "StartupSettings":
        """Build settings from an environment mapping with explicit overrides on top

        Missing or empty variables fall back to the field defaults. Overrides set to None are ignored so CLI options
        can be passed through unconditionally.

        :param environ: The environment to read, usually os.environ
        :param overrides: Field values that take precedence over the environment
        :raises EntrykitConfigError: If any value is invalid
        """
        values: dict[str, Any] = {}
        for field_name, env_name in ENVIRONMENT_FIELDS.items():
            raw = environ.get(env_name)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        values.update({k: v for k, v in overrides.items() if v is not None})
        if "root" not in values:
            values["root"] = _default_root(_parse_enabled(values.get("materialize", True)))

        try:
            settings = cls(**values)
        except ValidationError as e:
            raise EntrykitConfigError(_format_validation_error(e)) from e

        if "bindings" not in values:
            settings = settings.model_copy(update={"bindings": derive_bindings(environ, settings.separator)})
        log.debug(
            f"Loaded settings: {len(settings.services)} service(s), timeout {settings.timeout:g}s, "
            f"{len(settings.bindings)} binding(s), root {settings.root}"
        )
        return settings


def _parse_enabled(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_VALUES
    return value


def _default_root(materialize: bool) -> Path:
    """Return the home directory as configuration root

    Containers running as a uid without a passwd entry and without HOME have no home directory. That only matters
    when placeholders are going to be substituted, otherwise the working directory stands in.
    """
    try:
        return Path.home()
    except RuntimeError as e:
        if materialize:
            raise EntrykitConfigError(
                f"Unable to determine the home directory for the configuration root, set {ENV_ROOT}: {e}"
            ) from e
        log.debug(f"No home directory, using {Path.cwd()} as configuration root")
        return Path.cwd()


def _format_validation_error(e: ValidationError) -> str:
    lines = ["Invalid startup configuration:"]
    for error in e.errors():
        field_name = ".".join(str(part) for part in error["loc"]) or "settings"
        env_name = ENVIRONMENT_FIELDS.get(str(error["loc"][0])) if error["loc"] else None
        source = f" ({env_name})" if env_name else ""
        lines.append(f"  - {field_name}{source}: {error['msg']}")
    return "\n".join(lines)
