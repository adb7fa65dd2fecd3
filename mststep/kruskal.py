"""Kruskal's algorithm, recorded step by step."""

import logging
from typing import Dict, Iterable, List, Tuple

from .errors import InvalidInput
from .graph import EdgeKey, Graph, NodeId
from .steps import Action, KruskalSnapshot, StepLog, StepLogBuilder

logger = logging.getLogger(__name__)


# --- Disjoint Set Union (DSU) ---
# Tracks which nodes are already connected by accepted edges.
class DisjointSet:
    def __init__(self, nodes: Iterable[NodeId]) -> None:
        # Each node starts as its own parent (a set of one).
        self.parent: Dict[NodeId, NodeId] = {node: node for node in nodes}

    def find(self, x: NodeId) -> NodeId:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression: point everything on the walk straight at the root.
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x: NodeId, y: NodeId) -> bool:
        """Attach y's root under x's root. False if already in the same set."""
        rx = self.find(x)
        ry = self.find(y)
        if rx == ry:
            return False
        self.parent[ry] = rx
        return True

    def groups(self) -> Tuple[Tuple[NodeId, ...], ...]:
        """Current partition, grouped by root.

        Groups appear in the order their roots are first met while scanning
        node ids ascending; members inside a group are ascending too.
        """
        sets: Dict[NodeId, List[NodeId]] = {}
        for node in sorted(self.parent):
            sets.setdefault(self.find(node), []).append(node)
        return tuple(tuple(members) for members in sets.values())


def run_kruskal(graph: Graph) -> StepLog:
    """Run Kruskal's algorithm over ``graph`` and return its step log."""
    if not graph.nodes:
        raise InvalidInput("Cannot run Kruskal's algorithm on an empty graph.")

    n = len(graph.nodes)
    log = StepLogBuilder("kruskal", n)
    # sorted() is stable: equal weights keep their order in graph.edges
    edges: List[EdgeKey] = sorted((edge.key() for edge in graph.edges), key=lambda e: e.weight)
    dsu = DisjointSet(node.id for node in graph.nodes)

    def emit(action: Action, edge, remaining: Tuple[EdgeKey, ...], headline: str, narrative: str) -> None:
        log.emit(action, edge, headline, narrative, KruskalSnapshot(remaining, dsu.groups()))

    emit(Action.NONE, None, tuple(edges), "Starting Kruskal's algorithm",
         "First, all edges in the graph are sorted by weight in ascending order. "
         "Each node starts in its own disjoint set.")

    accepted = 0
    considered = 0
    for i, edge in enumerate(edges):
        if accepted >= n - 1:
            break
        considered = i + 1
        remaining = tuple(edges[i + 1:])
        emit(Action.CONSIDER_EDGE, edge, remaining, "Considering next edge",
             f"The next edge in the sorted list, {graph.edge_name(edge)} (weight {edge.weight}), "
             "is considered.")

        if dsu.union(edge.u, edge.v):
            accepted += 1
            emit(Action.ADD_EDGE, edge, remaining, "Edge added to MST",
                 "The nodes of this edge belong to different sets. Adding it will not form a "
                 "cycle, so it is added to the MST.")
            emit(Action.NONE, None, remaining, "Union of sets",
                 f"The sets containing {graph.label(edge.u)} and {graph.label(edge.v)} "
                 "are now merged into a single set.")
        else:
            emit(Action.DISCARD_EDGE, edge, remaining, "Edge discarded",
                 "The nodes of this edge already belong to the same set. Adding this edge "
                 "would form a cycle, so it is discarded.")

    remaining = tuple(edges[considered:])
    if accepted < n - 1:
        emit(Action.NONE, None, remaining, "Algorithm finished (forest)",
             f"All edges have been considered, but only {accepted} of the {n - 1} edges a spanning "
             f"tree needs were found. The graph is disconnected; the result is a minimum "
             f"spanning forest of {len(dsu.groups())} trees.")
    else:
        emit(Action.NONE, None, remaining, "Algorithm finished",
             "The Minimum Spanning Tree is complete.")

    frozen = log.freeze()
    logger.info("Kruskal: %d steps, %d edges accepted, total weight %d",
                len(frozen), accepted, frozen.total_weight())
    return frozen
