"""File discovery utilities for scanning repositories."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx")
DEFAULT_EXCLUDE_DIRS = {"node_modules"}
HIDDEN_PREFIX = "."


class SourceCollectionError(OSError):
    """Raised when a directory of the snapshot cannot be listed."""


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over source files in a directory tree.

    Directories named in ``exclude_dirs`` and directories whose name starts
    with a dot are never entered. Hidden files are still yielded when their
    extension matches.

    Args:
        root: Root directory to scan.
        include_ext: File name suffixes to include (e.g., {'.js', '.ts'}).
                    If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Set of directory names to skip.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum depth to descend. None means unlimited.

    Yields:
        Absolute Path objects for matching files.

    Raises:
        SourceCollectionError: If any directory cannot be listed.
    """
    suffixes = tuple(include_ext) if include_ext is not None else DEFAULT_EXTENSIONS
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    root = root.resolve()
    # Real paths of entered directories; a symlink back to one of them is not re-entered.
    visited: Set[Path] = set()

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        real = current.resolve()
        if real in visited:
            logger.debug("Skipping already visited directory %s", current)
            return
        visited.add(real)

        try:
            entries = sorted(current.iterdir())
        except OSError as exc:
            raise SourceCollectionError(
                exc.errno, f"Cannot list directory: {exc.strerror or exc}", str(current)
            ) from exc

        for entry in entries:
            if entry.is_dir():
                if entry.name in exclude_dirs or entry.name.startswith(HIDDEN_PREFIX):
                    continue
                yield from _walk(entry, depth + 1)
            elif entry.is_file():
                if entry.name.endswith(suffixes):
                    yield entry

    yield from _walk(root, 0)


def collect_source_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> List[Path]:
    """Collect every source file under root, failing as a whole on listing errors."""
    files = list(iter_files(root, include_ext, exclude_dirs, max_depth))
    logger.debug("Collected %d source files under %s", len(files), root)
    return files
