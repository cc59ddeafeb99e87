"""
Hierarchy Topology
==================

Structural view of an analysis result as a networkx directed graph.

This module computes TOPOLOGY (geometry), not IMPORTANCE (judgment):
- Graph of canonical edges, nodes carry their level
- Strongly connected clusters (mutual-reachability groups)
- Links a layered drawing connects (same or adjacent level)
- Structural metrics (density, acyclicity, longest chain)

No centrality or ranking is exposed.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import networkx as nx

from ..contracts.results import AnalysisResult, validate_square


@dataclass(frozen=True)
class HierarchyMetrics:
    """Immutable structural metrics for a hierarchy graph."""
    node_count: int
    edge_count: int
    density: float
    is_acyclic: bool
    level_count: int
    longest_chain: Optional[int] = None  # Only for acyclic graphs


@dataclass(frozen=True)
class HierarchyLink:
    source: int
    target: int
    level_diff: int


def matrix_to_digraph(matrix: Sequence[Sequence[int]]) -> nx.DiGraph:
    """Directed graph of every off-diagonal 1 in `matrix`."""
    size = validate_square(matrix)
    graph = nx.DiGraph()
    graph.add_nodes_from(range(size))
    graph.add_edges_from(
        (i, j)
        for i in range(size)
        for j in range(size)
        if i != j and matrix[i][j] == 1
    )
    return graph


def strongly_connected_clusters(frm: Sequence[Sequence[int]]) -> List[Tuple[int, ...]]:
    """
    Non-trivial groups of mutually reachable elements.

    Each group is sorted ascending; groups are ordered by first member.
    """
    graph = matrix_to_digraph(frm)
    clusters = [
        tuple(sorted(component))
        for component in nx.strongly_connected_components(graph)
        if len(component) > 1
    ]
    clusters.sort(key=lambda c: c[0])
    return clusters


def hierarchy_links(result: AnalysisResult) -> List[HierarchyLink]:
    """
    Direct IRM edges a layered drawing connects.

    An edge is kept when source level minus target level is 0 (same level)
    or 1 (one level apart in emission numbering). Row-major order.
    """
    levels = result.level_map()
    links = []
    for i, row in enumerate(result.irm):
        for j, cell in enumerate(row):
            if cell != 1 or i == j or i not in levels or j not in levels:
                continue
            level_diff = levels[i] - levels[j]
            if level_diff in (0, 1):
                links.append(HierarchyLink(source=i, target=j, level_diff=level_diff))
    return links


class HierarchyTopology:
    """
    Wraps a networkx DiGraph built from a result's canonical matrix.

    build_graph() replaces the internal graph state.
    """

    def __init__(self):
        self._graph = nx.DiGraph()
        self._level_count = 0

    def build_graph(self, result: AnalysisResult) -> None:
        self._graph = matrix_to_digraph(result.canonical_matrix)
        self._level_count = result.level_count

        levels = result.level_map()
        for index in self._graph.nodes:
            self._graph.nodes[index]["level"] = levels.get(index)
            self._graph.nodes[index]["identifier"] = result.identifier(index)

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    def successors(self, index: int) -> List[int]:
        if index not in self._graph:
            return []
        return sorted(self._graph.successors(index))

    def predecessors(self, index: int) -> List[int]:
        if index not in self._graph:
            return []
        return sorted(self._graph.predecessors(index))

    def compute_metrics(self) -> HierarchyMetrics:
        if not self._graph:
            return HierarchyMetrics(0, 0, 0.0, True, 0, None)

        is_acyclic = nx.is_directed_acyclic_graph(self._graph)
        longest_chain = nx.dag_longest_path_length(self._graph) if is_acyclic else None

        return HierarchyMetrics(
            node_count=self._graph.number_of_nodes(),
            edge_count=self._graph.number_of_edges(),
            density=nx.density(self._graph),
            is_acyclic=is_acyclic,
            level_count=self._level_count,
            longest_chain=longest_chain,
        )

    def clear(self):
        self._graph.clear()
        self._level_count = 0
