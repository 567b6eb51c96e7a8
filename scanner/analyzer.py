"""Per-file module analysis: imports, requires and exports."""

import logging
from pathlib import Path
from typing import Any, Optional

from graph.model import ModuleKind
from .records import (
    AnalysisFailure,
    AnalysisResult,
    AnalysisSuccess,
    DependencyBuckets,
    DependencyReference,
    ExportRecord,
    FileOutcome,
)
from .resolver import FileSystem, resolve_import_path
from .syntax import StatementKind, SyntaxTreeProvider, extract_statements

logger = logging.getLogger(__name__)

INTERNAL_PREFIXES = (".", "/")


def is_internal(specifier: str) -> bool:
    """A specifier is internal when it starts with '.' or '/'; nothing is checked on disk."""
    return specifier.startswith(INTERNAL_PREFIXES)


def analyze_tree(
    file_path: Path,
    tree: Any,
    fs: Optional[FileSystem] = None,
) -> AnalysisResult:
    """
    Extract dependency references and export records from a parsed file.

    Args:
        file_path: Path of the analyzed file; relative specifiers resolve
                   against its directory.
        tree: Syntax tree with a ``root_node``.
        fs: Filesystem capability passed through to the resolver.

    Returns:
        AnalysisResult for the file.
    """
    kind = ModuleKind.INTERNAL if file_path.is_absolute() else ModuleKind.EXTERNAL
    result = AnalysisResult(kind=kind)

    for statement in extract_statements(tree.root_node):
        if statement.kind is StatementKind.EXPORT:
            result.exports.append(ExportRecord(statement.code, statement.location))
            continue

        buckets: DependencyBuckets = (
            result.imports if statement.kind is StatementKind.IMPORT else result.requires
        )
        specifier = statement.specifier
        if is_internal(specifier):
            resolved = resolve_import_path(file_path, specifier, fs)
            buckets.internal.append(DependencyReference(specifier, resolved, statement.location))
        else:
            buckets.external.append(DependencyReference(specifier, None, statement.location))

    return result


def analyze_file(
    file_path: Path,
    provider: SyntaxTreeProvider,
    fs: Optional[FileSystem] = None,
) -> FileOutcome:
    """
    Read, parse and analyze one file.

    Any error while reading, parsing or walking the tree is logged and
    turned into an AnalysisFailure so the caller can skip the file.
    """
    try:
        source = file_path.read_bytes()
        tree = provider.parse(file_path, source)
        result = analyze_tree(file_path, tree, fs)
    except Exception as exc:
        logger.warning("Failed to analyze %s: %s", file_path, exc)
        return AnalysisFailure(file_path, f"{type(exc).__name__}: {exc}")

    logger.debug(
        "Analyzed %s: %d references, %d exports",
        file_path, result.reference_count, len(result.exports),
    )
    return AnalysisSuccess(file_path, result)
