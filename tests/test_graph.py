"""Tests for graph data model."""

import pytest

from graph.model import DependencyEdge, DependencyGraph, ModuleKind, ModuleNode


class TestDependencyGraph:
    """Tests for DependencyGraph class."""

    def test_empty_graph(self):
        """Test empty graph initialization."""
        graph = DependencyGraph()
        assert len(graph) == 0
        assert graph.nodes == []
        assert graph.edges == []
        assert graph.to_payload() == {"nodes": [], "edges": []}

    def test_add_node(self):
        """Test adding nodes."""
        graph = DependencyGraph()
        graph.add_node("/r/a.js", ModuleKind.INTERNAL)

        assert len(graph) == 1
        assert "/r/a.js" in graph
        assert graph.nodes == [ModuleNode("/r/a.js", ModuleKind.INTERNAL)]

    def test_add_node_accepts_string_kind(self):
        """Test that plain strings are coerced to ModuleKind."""
        graph = DependencyGraph()
        graph.add_node("react", "external")

        assert graph.get_kind("react") is ModuleKind.EXTERNAL

    def test_upsert_keeps_position_and_last_kind(self):
        """Test that rewriting a node keeps its position but takes the new kind."""
        graph = DependencyGraph()
        graph.add_node("x", ModuleKind.INTERNAL)
        graph.add_node("y", ModuleKind.EXTERNAL)
        graph.add_node("x", ModuleKind.EXTERNAL)

        assert [node.id for node in graph.nodes] == ["x", "y"]
        assert graph.get_kind("x") is ModuleKind.EXTERNAL
        assert len(graph) == 2

    def test_add_edge_requires_known_nodes(self):
        """Test that edges cannot point at unregistered nodes."""
        graph = DependencyGraph()
        graph.add_node("/r/a.js", ModuleKind.INTERNAL)

        with pytest.raises(KeyError):
            graph.add_edge("/r/a.js", "lodash")
        with pytest.raises(KeyError):
            graph.add_edge("lodash", "/r/a.js")
        assert graph.edges == []

    def test_edges_are_not_deduplicated(self):
        """Test that repeated dependencies produce repeated edges."""
        graph = DependencyGraph()
        graph.add_node("/r/a.js", ModuleKind.INTERNAL)
        graph.add_dependency("/r/a.js", "lodash", ModuleKind.EXTERNAL)
        graph.add_dependency("/r/a.js", "lodash", ModuleKind.EXTERNAL)

        assert graph.edges == [
            DependencyEdge("/r/a.js", "lodash"),
            DependencyEdge("/r/a.js", "lodash"),
        ]
        assert graph.get_targets("/r/a.js") == ["lodash", "lodash"]
        assert len(graph) == 2

    def test_get_sources(self):
        """Test getting sources that depend on a target."""
        graph = DependencyGraph()
        for source in ("/r/a.js", "/r/b.js"):
            graph.add_node(source, ModuleKind.INTERNAL)
            graph.add_dependency(source, "/r/shared.js", ModuleKind.INTERNAL)

        assert graph.get_sources("/r/shared.js") == {"/r/a.js", "/r/b.js"}
        assert graph.get_sources("/r/a.js") == set()

    def test_get_roots(self):
        """Test getting root nodes (nodes that are never targets)."""
        graph = DependencyGraph()
        graph.add_node("/r/main.js", ModuleKind.INTERNAL)
        graph.add_dependency("/r/main.js", "/r/lib.js", ModuleKind.INTERNAL)
        graph.add_node("/r/lib.js", ModuleKind.INTERNAL)
        graph.add_dependency("/r/lib.js", "react", ModuleKind.EXTERNAL)

        assert graph.get_roots() == {"/r/main.js"}

    def test_iter_nodes_by_kind(self):
        """Test filtering nodes by kind."""
        graph = DependencyGraph()
        graph.add_node("/r/a.js", ModuleKind.INTERNAL)
        graph.add_dependency("/r/a.js", "react", ModuleKind.EXTERNAL)
        graph.add_dependency("/r/a.js", "./missing", ModuleKind.INTERNAL)

        internal = [node.id for node in graph.iter_nodes(ModuleKind.INTERNAL)]
        external = [node.id for node in graph.iter_nodes(ModuleKind.EXTERNAL)]

        assert internal == ["/r/a.js", "./missing"]
        assert external == ["react"]
        assert len(list(graph.iter_nodes())) == 3

    def test_to_payload(self):
        """Test the serializable payload shape."""
        graph = DependencyGraph()
        graph.add_node("/r/a.js", ModuleKind.INTERNAL)
        graph.add_dependency("/r/a.js", "left-pad", ModuleKind.EXTERNAL)

        assert graph.to_payload() == {
            "nodes": [
                {"id": "/r/a.js", "type": "internal"},
                {"id": "left-pad", "type": "external"},
            ],
            "edges": [{"source": "/r/a.js", "target": "left-pad"}],
        }
        assert list(graph.iter_edges()) == [("/r/a.js", "left-pad")]

    def test_edges_property_returns_copy(self):
        """Test that the edges property cannot mutate the graph."""
        graph = DependencyGraph()
        graph.add_node("a", ModuleKind.INTERNAL)
        graph.add_dependency("a", "b", ModuleKind.EXTERNAL)

        graph.edges.clear()

        assert len(graph.edges) == 1

    def test_repr(self):
        """Test string representation."""
        graph = DependencyGraph()
        graph.add_node("/r/a.js", ModuleKind.INTERNAL)
        graph.add_dependency("/r/a.js", "react", ModuleKind.EXTERNAL)

        assert "nodes=2" in repr(graph)
        assert "edges=1" in repr(graph)
        assert "external=1" in repr(graph)
