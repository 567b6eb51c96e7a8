"""Per-file analysis records produced by the module analyzer."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from graph.model import ModuleKind


@dataclass(frozen=True)
class Location:
    """Start position of a construct: 1-based line, 0-based column."""

    line: int
    column: int


@dataclass(frozen=True)
class DependencyReference:
    """One import or require occurrence."""

    specifier: str
    resolved_path: Optional[Path]
    location: Location

    @property
    def target_id(self) -> str:
        """Graph node id: the resolved path, or the raw specifier if unresolved."""
        if self.resolved_path is not None:
            return str(self.resolved_path)
        return self.specifier

    def to_dict(self) -> Dict[str, Any]:
        return {
            "specifier": self.specifier,
            "resolved": str(self.resolved_path) if self.resolved_path is not None else None,
            "location": {"line": self.location.line, "column": self.location.column},
        }


@dataclass(frozen=True)
class ExportRecord:
    """Raw text of an export construct and where it starts."""

    code: str
    location: Location

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "location": {"line": self.location.line, "column": self.location.column},
        }


@dataclass
class DependencyBuckets:
    """References split by classification."""

    internal: List[DependencyReference] = field(default_factory=list)
    external: List[DependencyReference] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.internal) + len(self.external)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "internal": [ref.to_dict() for ref in self.internal],
            "external": [ref.to_dict() for ref in self.external],
        }


@dataclass
class AnalysisResult:
    """Everything extracted from one source file."""

    kind: ModuleKind
    imports: DependencyBuckets = field(default_factory=DependencyBuckets)
    requires: DependencyBuckets = field(default_factory=DependencyBuckets)
    exports: List[ExportRecord] = field(default_factory=list)

    @property
    def reference_count(self) -> int:
        return len(self.imports) + len(self.requires)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "imports": self.imports.to_dict(),
            "requires": self.requires.to_dict(),
            "exports": [record.to_dict() for record in self.exports],
        }


@dataclass(frozen=True)
class AnalysisSuccess:
    """A file that was parsed and analyzed."""

    path: Path
    result: AnalysisResult

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class AnalysisFailure:
    """A file that was skipped, with the reason it could not be analyzed."""

    path: Path
    reason: str

    @property
    def ok(self) -> bool:
        return False


FileOutcome = Union[AnalysisSuccess, AnalysisFailure]
