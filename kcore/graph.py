"""A bidirected graph keyed by unsigned vertex ids, with per-vertex arc tables.

An arc from ``u`` to ``v`` with direction ``d`` (0..3) is stored at ``u`` under
the key ``v << 2 | d`` and at ``v`` under ``u << 2 | (~d & 3)``.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple


@dataclass
class Vertex:
    """A vertex: its id, arc records keyed by encoded neighbour, and user data."""

    id: int
    arcs: Dict[int, dict] = field(default_factory=dict)
    data: dict = field(default_factory=dict)

    def neighbours(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(neighbour id, direction)`` for every arc."""
        for key in self.arcs:
            yield key >> 2, key & 3


class Graph:
    """Vertices mapped by id; each arc is recorded at both of its ends."""

    def __init__(self):
        self._vertices: Dict[int, Vertex] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, v: int) -> bool:
        return v in self._vertices

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def get_vertex(self, v: int) -> Optional[Vertex]:
        """Return the vertex with id ``v``, or None."""
        return self._vertices.get(v)

    def put_vertex(self, v: int) -> Tuple[Vertex, bool]:
        """Return the vertex ``v``, creating it if needed, and whether it was new."""
        if v < 0:
            raise ValueError("vertex ids are unsigned")
        vertex = self._vertices.get(v)
        if vertex is not None:
            return vertex, False
        vertex = self._vertices[v] = Vertex(v)
        return vertex, True

    def put_arc(self, vbeg: int, vend: int, direction: int) -> Tuple[dict, dict]:
        """Add an arc and return its records at the start and end vertices."""
        if not 0 <= direction <= 3:
            raise ValueError("direction must be in 0..3")
        start, _ = self.put_vertex(vbeg)
        pb = start.arcs.setdefault(vend << 2 | direction, {})
        end, _ = self.put_vertex(vend)
        pe = end.arcs.setdefault(vbeg << 2 | (~direction & 3), {})
        return pb, pe

    def delete_vertex(self, v: int) -> Optional[Vertex]:
        """Remove ``v`` and its arcs from all neighbours; return it, or None."""
        vertex = self._vertices.get(v)
        if vertex is None:
            return None
        for key in list(vertex.arcs):
            neighbour = self._vertices.get(key >> 2)
            if neighbour is not None:
                neighbour.arcs.pop(v << 2 | (~key & 3), None)
        del self._vertices[v]
        return vertex

    def lines(self) -> Iterator[str]:
        """Yield a text dump: ``v <id>`` per vertex and ``a <u><c><c><v>`` per arc."""
        for vid, vertex in self._vertices.items():
            yield f"v {vid}"
            for key in vertex.arcs:
                if vid < key >> 2:
                    yield f"a {vid}{'><'[key >> 1 & 1]}{'><'[key & 1]}{key >> 2}"