"""Graph data model for module dependency relationships."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple


class ModuleKind(str, Enum):
    """Classification of a module node."""

    INTERNAL = "internal"
    EXTERNAL = "external"


@dataclass(frozen=True)
class ModuleNode:
    """A module in the graph: a resolved file path or a raw specifier."""

    id: str
    kind: ModuleKind


@dataclass(frozen=True)
class DependencyEdge:
    """A directed 'source depends on target' relationship."""

    source: str
    target: str


class DependencyGraph:
    """
    A directed multigraph of module dependencies.

    Nodes are keyed by id and keep their first insertion position; writing
    an existing id again only replaces its kind. Edges are kept in insertion
    order and never deduplicated.
    """

    def __init__(self):
        self._nodes: Dict[str, ModuleKind] = {}
        self._edges: List[DependencyEdge] = []

    @property
    def nodes(self) -> List[ModuleNode]:
        """Return all nodes in insertion order."""
        return [ModuleNode(node_id, kind) for node_id, kind in self._nodes.items()]

    @property
    def edges(self) -> List[DependencyEdge]:
        """Return all edges in insertion order."""
        return list(self._edges)

    def add_node(self, node_id: str, kind: ModuleKind) -> None:
        """Add a node, or overwrite the kind of an existing one."""
        self._nodes[node_id] = ModuleKind(kind)

    def add_edge(self, source: str, target: str) -> None:
        """
        Append a directed edge from source to target.

        Both endpoints must already be registered as nodes.

        Raises:
            KeyError: If either endpoint is not a node of the graph.
        """
        for endpoint in (source, target):
            if endpoint not in self._nodes:
                raise KeyError(f"Unknown node: {endpoint!r}")
        self._edges.append(DependencyEdge(source, target))

    def add_dependency(self, source: str, target: str, kind: ModuleKind) -> None:
        """Upsert the target node with the given kind and link source to it."""
        self.add_node(target, kind)
        self.add_edge(source, target)

    def get_kind(self, node_id: str) -> Optional[ModuleKind]:
        """Return the kind of a node, or None if it is not in the graph."""
        return self._nodes.get(node_id)

    def get_targets(self, source: str) -> List[str]:
        """Get the targets of every edge leaving source, duplicates included."""
        return [edge.target for edge in self._edges if edge.source == source]

    def get_sources(self, target: str) -> Set[str]:
        """Get all modules that depend on the target."""
        return {edge.source for edge in self._edges if edge.target == target}

    def get_roots(self) -> Set[str]:
        """
        Get nodes that are never the target of an edge.

        For a scanned repository these are the entry points: files no other
        analyzed file imports or requires.
        """
        targets = {edge.target for edge in self._edges}
        return set(self._nodes) - targets

    def iter_nodes(self, kind: Optional[ModuleKind] = None) -> Iterator[ModuleNode]:
        """Iterate over nodes, optionally restricted to one kind."""
        for node_id, node_kind in self._nodes.items():
            if kind is None or node_kind is kind:
                yield ModuleNode(node_id, node_kind)

    def iter_edges(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all edges as (source, target) tuples."""
        for edge in self._edges:
            yield edge.source, edge.target

    def to_payload(self) -> Dict[str, Any]:
        """
        Return the serializable graph payload.

        Returns:
            ``{"nodes": [{"id", "type"}], "edges": [{"source", "target"}]}``
        """
        return {
            "nodes": [
                {"id": node_id, "type": kind.value}
                for node_id, kind in self._nodes.items()
            ],
            "edges": [
                {"source": edge.source, "target": edge.target}
                for edge in self._edges
            ],
        }

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        """Check if a node is in the graph."""
        return node_id in self._nodes

    def __repr__(self) -> str:
        internal = sum(1 for kind in self._nodes.values() if kind is ModuleKind.INTERNAL)
        return (
            f"DependencyGraph(nodes={len(self._nodes)}, edges={len(self._edges)}, "
            f"internal={internal}, external={len(self._nodes) - internal})"
        )
