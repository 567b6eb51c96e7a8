"""Scanner module for file discovery and dependency extraction."""

from .discovery import iter_files, collect_source_files, SourceCollectionError
from .analyzer import analyze_file, analyze_tree, is_internal
from .resolver import resolve_import_path, FileSystem, LocalFileSystem
from .syntax import TreeSitterProvider, SyntaxTreeProvider
from .builder import build_graph, run_pipeline, assemble_graph, ScanResult

__all__ = [
    "iter_files",
    "collect_source_files",
    "SourceCollectionError",
    "analyze_file",
    "analyze_tree",
    "is_internal",
    "resolve_import_path",
    "FileSystem",
    "LocalFileSystem",
    "TreeSitterProvider",
    "SyntaxTreeProvider",
    "build_graph",
    "run_pipeline",
    "assemble_graph",
    "ScanResult",
]
