"""JSON exporters for dependency graphs and per-file analysis reports."""

import json
from pathlib import Path, PurePath
from typing import Any, Dict, Iterable, List, Optional

from graph.model import DependencyGraph
from scanner.records import AnalysisFailure, AnalysisSuccess, FileOutcome


def to_json(
    graph: DependencyGraph,
    base: Optional[Path] = None,
    indent: Optional[int] = 2,
) -> str:
    """
    Convert a dependency graph to its JSON payload.

    Args:
        graph: The dependency graph to export.
        base: Optional directory; absolute ids inside it are shown relative
              to it, prefixed with "./". Ids that are not absolute paths
              are left unchanged.
        indent: JSON indentation level (None for a single line).

    Returns:
        JSON string ``{"nodes": [{"id", "type"}], "edges": [{"source", "target"}]}``.
    """
    payload = graph.to_payload()
    if base is not None:
        for node in payload["nodes"]:
            node["id"] = _get_path_str(node["id"], base)
        for edge in payload["edges"]:
            edge["source"] = _get_path_str(edge["source"], base)
            edge["target"] = _get_path_str(edge["target"], base)
    return json.dumps(payload, indent=indent)


def analysis_to_json(
    outcomes: Iterable[FileOutcome],
    base: Optional[Path] = None,
    indent: Optional[int] = 2,
) -> str:
    """
    Convert per-file outcomes to a JSON report.

    Analyzed files are listed under ``files`` keyed by path; skipped files
    are listed under ``skipped`` with the reason they failed.
    """
    files: Dict[str, Any] = {}
    skipped: List[Dict[str, str]] = []

    for outcome in outcomes:
        path_str = _get_path_str(str(outcome.path), base) if base is not None else str(outcome.path)
        if isinstance(outcome, AnalysisSuccess):
            files[path_str] = outcome.result.to_dict()
        elif isinstance(outcome, AnalysisFailure):
            skipped.append({"path": path_str, "reason": outcome.reason})

    return json.dumps({"files": files, "skipped": skipped}, indent=indent)


def _get_path_str(value: str, base: Path) -> str:
    """
    Get the display string of a node id relative to base when possible.

    Relativized ids keep a leading "./" so they never read as a package name.
    """
    path = PurePath(value)
    if not path.is_absolute():
        return value
    try:
        relative = path.relative_to(base).as_posix()
    except ValueError:
        return value
    return "." if relative == "." else f"./{relative}"
