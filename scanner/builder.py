"""Graph builder that orchestrates scanning and graph construction."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from graph.model import DependencyGraph, ModuleKind
from .analyzer import analyze_file
from .config import ScanConfig
from .discovery import collect_source_files
from .records import AnalysisFailure, AnalysisSuccess, DependencyReference, FileOutcome
from .resolver import FileSystem
from .syntax import SyntaxTreeProvider, TreeSitterProvider

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """The graph of one run plus what happened to every collected file."""

    graph: DependencyGraph
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def analyzed(self) -> List[AnalysisSuccess]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, AnalysisSuccess)]

    @property
    def failures(self) -> List[AnalysisFailure]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, AnalysisFailure)]


def _add_references(
    graph: DependencyGraph,
    source: str,
    references: Iterable[DependencyReference],
    kind: ModuleKind,
) -> None:
    for reference in references:
        graph.add_dependency(source, reference.target_id, kind)


def assemble_graph(outcomes: Iterable[FileOutcome]) -> DependencyGraph:
    """
    Fold per-file outcomes into a new dependency graph.

    Each analyzed file becomes a node, then every reference adds (or
    re-kinds) its target node and appends one edge. Failed files are left
    out entirely.

    Args:
        outcomes: Outcomes in collection order.

    Returns:
        A fresh DependencyGraph.
    """
    graph = DependencyGraph()

    for outcome in outcomes:
        if not isinstance(outcome, AnalysisSuccess):
            continue
        source = str(outcome.path)
        analysis = outcome.result
        graph.add_node(source, analysis.kind)

        _add_references(graph, source, analysis.imports.internal, ModuleKind.INTERNAL)
        _add_references(graph, source, analysis.imports.external, ModuleKind.EXTERNAL)
        _add_references(graph, source, analysis.requires.internal, ModuleKind.INTERNAL)
        _add_references(graph, source, analysis.requires.external, ModuleKind.EXTERNAL)

    return graph


def run_pipeline(
    root: Path,
    provider: Optional[SyntaxTreeProvider] = None,
    fs: Optional[FileSystem] = None,
    config: Optional[ScanConfig] = None,
) -> ScanResult:
    """
    Scan a directory and build its dependency graph.

    Args:
        root: Directory containing the source snapshot.
        provider: Syntax tree provider (default: tree-sitter).
        fs: Filesystem capability used for specifier resolution.
        config: Discovery options (default: built-in extensions and exclusions).

    Returns:
        ScanResult with the graph and every per-file outcome.

    Raises:
        SourceCollectionError: If the snapshot cannot be enumerated.
    """
    if provider is None:
        provider = TreeSitterProvider()
    if config is None:
        config = ScanConfig()

    files = collect_source_files(
        root,
        include_ext=config.include_ext,
        exclude_dirs=config.exclude_dirs,
        max_depth=config.max_depth,
    )

    outcomes = [analyze_file(file_path, provider, fs) for file_path in files]
    result = ScanResult(graph=assemble_graph(outcomes), outcomes=outcomes)

    if result.failures:
        logger.warning("Skipped %d of %d files", len(result.failures), len(files))
    if logger.isEnabledFor(logging.DEBUG):
        graph = result.graph
        logger.debug(
            "Built %r: %d entry points, %d external packages",
            graph, len(graph.get_roots()), sum(1 for _ in graph.iter_nodes(ModuleKind.EXTERNAL)),
        )
    return result


def build_graph(
    root: Path,
    provider: Optional[SyntaxTreeProvider] = None,
    fs: Optional[FileSystem] = None,
    config: Optional[ScanConfig] = None,
) -> DependencyGraph:
    """Scan a directory and return only its dependency graph."""
    return run_pipeline(root, provider, fs, config).graph
