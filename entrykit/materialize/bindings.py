import logging
import re
from typing import Annotated, Mapping

from pydantic import BaseModel, ConfigDict, Field

from entrykit.const import DEFAULT_SEPARATOR, REGEX_BINDING_KEY_PATTERN

log = logging.getLogger(__name__)


class Binding(BaseModel):
    """A placeholder key and the value that replaces ``${key}`` in configuration files."""

    model_config = ConfigDict(frozen=True)

    key: Annotated[str, Field(pattern=REGEX_BINDING_KEY_PATTERN)]
    value: str

    @property
    def placeholder(self) -> str:
        return "${" + self.key + "}"


def split_binding(raw: str, separator: str = DEFAULT_SEPARATOR) -> tuple[str, str] | None:
    """Split a ``key;value`` string at the first separator

    :return: The key and value, or None if the separator is absent
    """
    key, sep, value = raw.partition(separator)
    if not sep:
        return None
    return key, value


def derive_bindings(environ: Mapping[str, str], separator: str = DEFAULT_SEPARATOR) -> list[Binding]:
    """Derive placeholder bindings from environment variable values

    Only values containing the separator are considered. The value is split at the first separator into a key and a
    replacement value. Values whose key part is not a legal binding key are ignored. When two variables carry the same
    key, the later one in the mapping's iteration order wins.

    :param environ: The environment mapping to read, usually a copy of os.environ
    :param separator: The separator between key and value
    :return: The bindings, in order of first appearance of each key
    """
    found: dict[str, str] = {}
    for name, raw in environ.items():
        parts = split_binding(raw, separator)
        if parts is None:
            continue
        key, value = parts
        if not re.fullmatch(REGEX_BINDING_KEY_PATTERN, key):
            log.debug(f"Ignoring variable {name}: '{key}' is not a valid placeholder key")
            continue
        if key in found:
            log.warning(f"Placeholder key '{key}' is set more than once, using the value from {name}")
        found[key] = value

    return [Binding(key=key, value=value) for key, value in found.items()]
