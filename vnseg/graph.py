"""
Weighted directed graphs over syllable positions.

A segmentation lattice for a phrase of N syllables has vertices 0..N and
an edge (u, v) for every candidate word spanning syllables u..v-1. Edges
always point forward, so the lattice is acyclic.
"""

import heapq
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Edge:
    u: int
    v: int
    weight: float = 1.0


class WeightedGraph:
    """Adjacency-list weighted directed graph with vertices 0..n_vertices-1."""

    def __init__(self, n_vertices: int):
        if n_vertices < 1:
            raise ValueError("A graph needs at least one vertex")
        self.n_vertices = n_vertices
        self._out: List[Dict[int, Edge]] = [{} for _ in range(n_vertices)]
        self._in_degree = [0] * n_vertices

    def insert(self, edge: Edge):
        """Insert an edge; an existing edge (u, v) is replaced."""
        for vertex in (edge.u, edge.v):
            if not 0 <= vertex < self.n_vertices:
                raise ValueError(f"Vertex {vertex} out of range for {edge}")
        if edge.v not in self._out[edge.u]:
            self._in_degree[edge.v] += 1
        self._out[edge.u][edge.v] = edge

    def has_edge(self, u: int, v: int) -> bool:
        return v in self._out[u]

    def out_edges(self, u: int) -> List[Edge]:
        return list(self._out[u].values())

    def edges(self) -> List[Edge]:
        return [e for out in self._out for e in out.values()]

    def in_degree(self, v: int) -> int:
        return self._in_degree[v]

    def isolated_vertices(self) -> List[int]:
        """Vertices without any incoming edge, in ascending order."""
        return [v for v, degree in enumerate(self._in_degree) if degree == 0]

    def count_components(self) -> int:
        """Number of connected components, ignoring edge direction."""
        neighbours: List[List[int]] = [[] for _ in range(self.n_vertices)]
        for edge in self.edges():
            neighbours[edge.u].append(edge.v)
            neighbours[edge.v].append(edge.u)

        seen = [False] * self.n_vertices
        components = 0
        for start in range(self.n_vertices):
            if seen[start]:
                continue
            components += 1
            seen[start] = True
            stack = [start]
            while stack:
                vertex = stack.pop()
                for other in neighbours[vertex]:
                    if not seen[other]:
                        seen[other] = True
                        stack.append(other)
        return components

    def shortest_path(self, source: int, target: int) -> Optional[List[int]]:
        """
        Lowest-weight path between two vertices (Dijkstra).

        Returns:
            The vertices of the path from source to target, or None if the
            target cannot be reached.
        """
        dist: Dict[int, float] = {source: 0.0}
        prev: Dict[int, int] = {}
        done = set()
        heap = [(0.0, source)]
        while heap:
            d, u = heapq.heappop(heap)
            if u in done:
                continue
            done.add(u)
            if u == target:
                break
            for edge in self._out[u].values():
                candidate = d + edge.weight
                if edge.v not in dist or candidate < dist[edge.v]:
                    dist[edge.v] = candidate
                    prev[edge.v] = u
                    heapq.heappush(heap, (candidate, edge.v))

        if target not in done:
            return None
        path = [target]
        while path[-1] != source:
            path.append(prev[path[-1]])
        path.reverse()
        return path

    def __repr__(self):
        edges = ", ".join(f"({e.u}->{e.v}: {e.weight:g})" for e in self.edges())
        return f"WeightedGraph({self.n_vertices}, [{edges}])"
