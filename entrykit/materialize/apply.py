import logging
import os
import re
from pathlib import Path
from typing import Iterator, Mapping, Union

from entrykit.const import DEFAULT_SEPARATOR
from entrykit.error import EntrykitFileError
from entrykit.materialize.bindings import Binding, derive_bindings

log = logging.getLogger(__name__)


def iter_regular_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under root in a stable order

    Symlinks are neither followed nor yielded so the walk stays inside root.
    """
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def substitute(content: bytes, bindings: list[Binding]) -> bytes:
    """Replace every ``${key}`` in content with its value in a single pass

    Inserted values are never scanned again, so a value that itself contains ``${other}`` is written verbatim
    whatever the order of the bindings.
    """
    if not bindings:
        return content
    values = {os.fsencode(binding.placeholder): os.fsencode(binding.value) for binding in bindings}
    pattern = re.compile(b"|".join(re.escape(placeholder) for placeholder in values))
    return pattern.sub(lambda match: values[match.group(0)], content)


def apply_bindings(root: Union[str, os.PathLike], bindings: list[Binding]) -> list[Path]:
    """Rewrite placeholders in all regular files under root in place

    Files without a matching placeholder are left untouched. The operation is not atomic across files: if an error
    occurs, files processed before it stay modified.

    :param root: The directory tree to rewrite
    :param bindings: The bindings to apply
    :return: The files whose content changed
    :raises EntrykitFileError: If root is not a directory or a file cannot be read or written
    """
    root = Path(root)
    if not root.is_dir():
        raise EntrykitFileError(f"Configuration root '{root}' does not exist or is not a directory", filepath=root)

    changed: list[Path] = []
    if not bindings:
        log.debug("No placeholder bindings found, skipping file substitution")
        return changed

    for binding in bindings:
        log.info(f"Set key {binding.key} to value {binding.value}")

    for path in iter_regular_files(root):
        try:
            content = path.read_bytes()
        except OSError as e:
            raise EntrykitFileError(f"Unable to read '{path}': {e.strerror}", filepath=path) from e

        rendered = substitute(content, bindings)
        if rendered == content:
            continue

        try:
            path.write_bytes(rendered)
        except OSError as e:
            raise EntrykitFileError(f"Unable to write '{path}': {e.strerror}", filepath=path) from e
        log.debug(f"Substituted placeholders in {path}")
        changed.append(path)

    return changed


def materialize(
    root: Union[str, os.PathLike], environ: Mapping[str, str], separator: str = DEFAULT_SEPARATOR
) -> list[Path]:
    """Derive bindings from environ and apply them to every file under root

    :param root: The directory tree to rewrite
    :param environ: The environment mapping to derive bindings from
    :param separator: The separator between key and value in binding variables
    :return: The files whose content changed
    """
    return apply_bindings(root, derive_bindings(environ, separator))
