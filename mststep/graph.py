"""Graph model shared by the engines, the navigator and the renderers."""

import copy
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import networkx as nx

from .errors import InvalidInput


NodeId = int


class EdgeKey(NamedTuple):
    """Immutable description of an edge, safe to store inside a Step."""

    u: NodeId
    v: NodeId
    weight: int

    @property
    def pair(self) -> Tuple[NodeId, NodeId]:
        return (min(self.u, self.v), max(self.u, self.v))

    def other(self, node_id: NodeId) -> NodeId:
        return self.v if node_id == self.u else self.u


@dataclass
class Node:
    id: NodeId
    label: str
    x: float = 0.0
    y: float = 0.0


@dataclass
class Edge:
    u: NodeId
    v: NodeId
    weight: int
    in_mst: bool = False

    @property
    def pair(self) -> Tuple[NodeId, NodeId]:
        return (min(self.u, self.v), max(self.u, self.v))

    def key(self) -> EdgeKey:
        return EdgeKey(self.u, self.v, self.weight)

    def other(self, node_id: NodeId) -> NodeId:
        return self.v if node_id == self.u else self.u


class Graph:
    """Weighted undirected graph with at most one edge per node pair.

    Node and edge lists keep insertion order; the engines rely on it for
    their tie-breaks. ``in_mst`` flags belong to the navigator, the engines
    only read the graph.
    """

    def __init__(self) -> None:
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self._nodes_by_id: Dict[NodeId, Node] = {}
        self._edges_by_pair: Dict[Tuple[NodeId, NodeId], Edge] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)})"

    # --- Construction ---

    def add_node(self, label: Optional[str] = None, x: float = 0.0, y: float = 0.0,
                 node_id: Optional[NodeId] = None) -> Node:
        if node_id is None:
            node_id = max(self._nodes_by_id, default=-1) + 1
        if node_id in self._nodes_by_id:
            raise InvalidInput(f"Node id {node_id} already exists")
        node = Node(node_id, label if label is not None else str(node_id), x, y)
        self.nodes.append(node)
        self._nodes_by_id[node_id] = node
        return node

    def add_edge(self, u: NodeId, v: NodeId, weight: int) -> Edge:
        if u == v:
            raise InvalidInput(f"Self loop on node {u} is not allowed")
        for end in (u, v):
            if end not in self._nodes_by_id:
                raise InvalidInput(f"Edge endpoint {end} is not a node of the graph")
        if isinstance(weight, bool) or int(weight) != weight or weight < 1:
            raise InvalidInput(f"Edge weight must be an integer >= 1, got {weight!r}")
        pair = (min(u, v), max(u, v))
        if pair in self._edges_by_pair:
            raise InvalidInput(f"Edge {self.label(u)}-{self.label(v)} already exists")
        edge = Edge(u, v, int(weight))
        self.edges.append(edge)
        self._edges_by_pair[pair] = edge
        return edge

    @classmethod
    def from_edge_list(cls, labels: Sequence[str],
                       edges: Iterable[Tuple[object, object, int]]) -> "Graph":
        """Build a graph from node labels and ``(u, v, weight)`` triples.

        Endpoints may be given as node ids or as labels. Node ids follow the
        order of ``labels`` starting at 0.
        """
        graph = cls()
        for label in labels:
            graph.add_node(label)
        for u, v, w in edges:
            graph.add_edge(graph.resolve(u), graph.resolve(v), w)
        return graph

    # --- Lookup ---

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._nodes_by_id

    def node(self, node_id: NodeId) -> Node:
        try:
            return self._nodes_by_id[node_id]
        except KeyError:
            raise InvalidInput(f"Unknown node id {node_id}") from None

    def label(self, node_id: NodeId) -> str:
        node = self._nodes_by_id.get(node_id)
        return node.label if node is not None else "?"

    def resolve(self, ref: object) -> NodeId:
        """Map a node id or a node label to a node id."""
        if isinstance(ref, int) and not isinstance(ref, bool) and ref in self._nodes_by_id:
            return ref
        for node in self.nodes:
            if node.label == ref:
                return node.id
        if isinstance(ref, str) and ref.isdigit() and int(ref) in self._nodes_by_id:
            return int(ref)
        raise InvalidInput(f"Unknown node {ref!r}")

    def find_edge(self, u: NodeId, v: NodeId) -> Optional[Edge]:
        return self._edges_by_pair.get((min(u, v), max(u, v)))

    def incident_edges(self, node_id: NodeId) -> Iterator[Edge]:
        for edge in self.edges:
            if edge.u == node_id or edge.v == node_id:
                yield edge

    def neighbors(self, node_id: NodeId) -> List[NodeId]:
        return [edge.other(node_id) for edge in self.incident_edges(node_id)]

    def edge_name(self, edge) -> str:
        return f"{self.label(edge.u)}-{self.label(edge.v)}"

    # --- MST membership (derived view) ---

    @property
    def mst_edges(self) -> List[Edge]:
        return [edge for edge in self.edges if edge.in_mst]

    @property
    def total_weight(self) -> int:
        return sum(edge.weight for edge in self.edges if edge.in_mst)

    def clear_mst(self) -> None:
        for edge in self.edges:
            edge.in_mst = False

    def copy(self) -> "Graph":
        return copy.deepcopy(self)

    # --- networkx interop ---

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        for node in self.nodes:
            G.add_node(node.id, label=node.label, pos=(node.x, node.y))
        for edge in self.edges:
            G.add_edge(edge.u, edge.v, weight=edge.weight, in_mst=edge.in_mst)
        return G

    @classmethod
    def from_networkx(cls, G: nx.Graph,
                      pos: Optional[Dict[object, Tuple[float, float]]] = None) -> "Graph":
        """Convert a networkx graph; nodes are renumbered 0..n-1 in ``G`` order."""
        if G.is_directed() or G.is_multigraph():
            raise InvalidInput("Only simple undirected graphs are supported")
        graph = cls()
        ids: Dict[object, NodeId] = {}
        for i, (n, data) in enumerate(G.nodes(data=True)):
            x, y = (pos or {}).get(n, data.get("pos", (0.0, 0.0)))
            graph.add_node(str(data.get("label", n)), float(x), float(y), node_id=i)
            ids[n] = i
        for u, v, data in G.edges(data=True):
            graph.add_edge(ids[u], ids[v], data.get("weight", 1))
        return graph
