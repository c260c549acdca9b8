"""Tests for DependencyGraph storage and structural queries."""

from __future__ import annotations

import pytest

from infracascade.domain.models import DependencyEdge, InfrastructureNode
from infracascade.domain.types import EdgeType, NodeType
from infracascade.infrastructure.graph.model import DependencyGraph


def _node(node_id: str, node_type: NodeType = NodeType.COUNTRY) -> InfrastructureNode:
    return InfrastructureNode(id=node_id, type=node_type, name=node_id)


def _edge(source: str, target: str, edge_type: EdgeType = EdgeType.SERVES) -> DependencyEdge:
    return DependencyEdge(source=source, target=target, type=edge_type, strength=1.0)


@pytest.fixture
def chain() -> DependencyGraph:
    """a -> b -> c -> d"""
    g = DependencyGraph()
    for n in "abcd":
        g.add_node(_node(n))
    g.add_edge(_edge("a", "b"))
    g.add_edge(_edge("b", "c"))
    g.add_edge(_edge("c", "d"))
    return g


class TestMutation:
    def test_add_edge_requires_endpoints(self) -> None:
        g = DependencyGraph()
        g.add_node(_node("a"))
        with pytest.raises(ValueError, match="unknown node 'b'"):
            g.add_edge(_edge("a", "b"))
        assert g.edges == []

    def test_replace_node_keeps_position(self) -> None:
        g = DependencyGraph()
        g.add_node(_node("a"))
        g.add_node(_node("b"))
        g.add_node(InfrastructureNode(id="a", type=NodeType.COUNTRY, name="renamed"))
        assert list(g.nodes) == ["a", "b"]
        assert g.node("a").name == "renamed"  # type: ignore[union-attr]

    def test_parallel_edges_are_kept(self) -> None:
        g = DependencyGraph()
        g.add_node(_node("a", NodeType.CABLE))
        g.add_node(_node("b"))
        g.add_edge(_edge("a", "b", EdgeType.SERVES))
        g.add_edge(_edge("a", "b", EdgeType.LANDS_AT))
        assert [e.type for e in g.edges_between("a", "b")] == [EdgeType.SERVES, EdgeType.LANDS_AT]
        assert len(g.edges) == 2


class TestReads:
    def test_indexes_in_insertion_order(self, chain: DependencyGraph) -> None:
        assert [e.target for e in chain.outgoing("a")] == ["b"]
        assert [e.source for e in chain.incoming("c")] == ["b"]
        assert chain.outgoing("d") == []
        assert chain.incoming("missing") == []

    def test_contains_and_len(self, chain: DependencyGraph) -> None:
        assert "a" in chain
        assert "z" not in chain
        assert len(chain) == 4

    def test_nodes_of_type(self) -> None:
        g = DependencyGraph()
        g.add_node(_node("cable:x", NodeType.CABLE))
        g.add_node(_node("country:US"))
        assert [n.id for n in g.nodes_of_type(NodeType.CABLE)] == ["cable:x"]


class TestStructure:
    def test_acyclic(self, chain: DependencyGraph) -> None:
        assert chain.is_acyclic()
        chain.add_edge(_edge("d", "a"))
        assert not chain.is_acyclic()

    def test_reachable_excludes_source(self, chain: DependencyGraph) -> None:
        assert chain.reachable("a") == {"b": 1, "c": 2, "d": 3}

    def test_reachable_with_depth(self, chain: DependencyGraph) -> None:
        assert chain.reachable("a", max_depth=2) == {"b": 1, "c": 2}

    def test_reachable_unknown(self, chain: DependencyGraph) -> None:
        assert chain.reachable("zzz") == {}

    def test_stats(self) -> None:
        g = DependencyGraph()
        g.add_node(_node("cable:x", NodeType.CABLE))
        g.add_node(_node("port:p", NodeType.PORT))
        g.add_node(_node("country:US"))
        g.add_edge(_edge("cable:x", "country:US"))
        stats = g.stats()
        assert (stats.nodes, stats.edges) == (3, 1)
        assert (stats.cables, stats.ports, stats.countries) == (1, 1, 1)
        assert stats.pipelines == stats.chokepoints == 0
