"""Path resolution utilities for mapping relative specifiers to actual files."""

import logging
import os
from pathlib import Path
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)

# Lookup order matters: the first existing candidate wins.
RESOLVE_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx", ".json")
INDEX_BASENAME = "index"


class FileSystem(Protocol):
    """Existence checks used during resolution."""

    def is_file(self, path: Path) -> bool:
        """Return True if path is an existing regular file."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True if path exists (file or directory)."""
        ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def exists(self, path: Path) -> bool:
        return path.exists()


def resolve_import_path(
    referencing_file: Union[str, Path],
    specifier: str,
    fs: Optional[FileSystem] = None,
) -> Optional[Path]:
    """
    Resolve a relative import specifier to a file path.

    Tries, in order:
    1. ``<base><ext>`` for each extension in RESOLVE_EXTENSIONS.
    2. ``<base>/index<ext>`` for each extension in the same order.
    3. ``<base>`` itself (extensionless file or directory without index).

    ``<base>`` is the specifier joined onto the referencing file's directory
    and normalized lexically. Symlinks are not followed.

    Args:
        referencing_file: Absolute path of the file containing the reference.
        specifier: The raw specifier, e.g. ``./utils`` or ``../lib/api``.
        fs: Filesystem capability. Defaults to the local disk.

    Returns:
        Resolved Path if a candidate exists, None otherwise (including every
        specifier that does not start with a dot).
    """
    if not specifier.startswith("."):
        return None

    if fs is None:
        fs = LocalFileSystem()

    source_dir = Path(referencing_file).parent
    base = os.path.normpath(os.path.join(source_dir, specifier))

    for ext in RESOLVE_EXTENSIONS:
        candidate = Path(base + ext)
        if fs.is_file(candidate):
            return candidate

    for ext in RESOLVE_EXTENSIONS:
        candidate = Path(base) / f"{INDEX_BASENAME}{ext}"
        if fs.is_file(candidate):
            return candidate

    if fs.exists(Path(base)):
        return Path(base)

    logger.debug("Unresolved specifier %r from %s", specifier, referencing_file)
    return None
