from __future__ import annotations

from dataclasses import dataclass

from network_graph.models import NetworkData


@dataclass(frozen=True, slots=True)
class GraphArena:
    """Integer-indexed view of a ``NetworkData`` used by the strategies.

    Nodes live at positions ``0..n-1`` in their original order and links are
    ``(u, v)`` index pairs. Adjacency is derived on demand; nothing here points
    back into the node objects.
    """

    ids: tuple[str, ...]
    index: dict[str, int]
    edges: tuple[tuple[int, int], ...]
    sizes: tuple[float, ...]

    @classmethod
    def from_network(cls, data: NetworkData) -> "GraphArena":
        ids = tuple(node.id for node in data.nodes)
        index = {node_id: idx for idx, node_id in enumerate(ids)}
        edges = tuple((index[link.source], index[link.target]) for link in data.links)
        return cls(ids=ids, index=index, edges=edges, sizes=tuple(float(node.size) for node in data.nodes))

    @property
    def node_count(self) -> int:
        return len(self.ids)

    @property
    def link_count(self) -> int:
        return len(self.edges)

    def degrees(self) -> list[int]:
        out = [0] * len(self.ids)
        for u, v in self.edges:
            out[u] += 1
            out[v] += 1
        return out

    def weighted_adjacency(self) -> list[dict[int, float]]:
        # self-loops are stored twice on the diagonal so that row sums equal degrees
        adj: list[dict[int, float]] = [{} for _ in self.ids]
        for u, v in self.edges:
            adj[u][v] = adj[u].get(v, 0.0) + 1.0
            adj[v][u] = adj[v].get(u, 0.0) + 1.0
        return adj
