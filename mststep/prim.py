"""Prim's algorithm, recorded step by step."""

import logging
from typing import List, Optional, Set

from .errors import InvalidInput
from .graph import EdgeKey, Graph, NodeId
from .steps import Action, PrimSnapshot, StepLog, StepLogBuilder

logger = logging.getLogger(__name__)


class _PrimRun:
    """Working state of a single Prim run. Discarded once the log is frozen."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.visited: List[NodeId] = []
        self._visited_set: Set[NodeId] = set()
        self.frontier: List[EdgeKey] = []
        self.accepted = 0
        self.log = StepLogBuilder("prim", len(graph.nodes))

    def snapshot(self) -> PrimSnapshot:
        return PrimSnapshot(tuple(self.frontier), tuple(self.visited))

    def emit(self, action: Action, edge: Optional[EdgeKey], headline: str, narrative: str) -> None:
        self.log.emit(action, edge, headline, narrative, self.snapshot())

    def is_visited(self, node_id: NodeId) -> bool:
        return node_id in self._visited_set

    def visit(self, node_id: NodeId) -> None:
        self.visited.append(node_id)
        self._visited_set.add(node_id)

    def push_edges(self, node_id: NodeId) -> None:
        # Edges towards already visited nodes are skipped; stale entries that
        # become both-visited later stay queued and are discarded on dequeue.
        for edge in self.graph.incident_edges(node_id):
            if not self.is_visited(edge.other(node_id)):
                self.frontier.append(edge.key())
        self.frontier.sort(key=lambda e: e.weight)

    def seed(self, node_id: NodeId, first: bool) -> None:
        self.visit(node_id)
        self.push_edges(node_id)
        label = self.graph.label(node_id)
        if first:
            self.emit(Action.NONE, None, f"Starting Prim's from node {label}",
                      "The algorithm begins. The visited set is initialized with the start node, "
                      "and all its adjacent edges are added to the priority queue.")
        else:
            self.emit(Action.NONE, None, f"Starting a new tree from node {label}",
                      "The priority queue is empty but some nodes are still unreachable. "
                      f"The graph is disconnected, so a new tree is grown from node {label}.")

    def grow(self) -> None:
        g = self.graph
        while len(self.visited) < len(g.nodes) and self.frontier:
            edge = self.frontier.pop(0)
            self.emit(Action.CONSIDER_EDGE, edge, "Extracting minimum edge",
                      f"The edge with the lowest weight, {g.edge_name(edge)} (weight {edge.weight}), "
                      "is removed from the priority queue for consideration.")

            u_visited = self.is_visited(edge.u)
            v_visited = self.is_visited(edge.v)
            if u_visited != v_visited:
                new_node = edge.v if u_visited else edge.u
                label = g.label(new_node)
                self.visit(new_node)
                self.accepted += 1
                self.emit(Action.ADD_EDGE, edge, "Edge added to MST",
                          f"This edge connects a visited node to an unvisited one ({label}). "
                          "It's a safe edge to add to the Minimum Spanning Tree.")
                self.push_edges(new_node)
                self.emit(Action.NONE, None, "Updating priority queue",
                          f"Node {label} is now visited. All its edges that lead to unvisited "
                          "nodes are added to the priority queue.")
            else:
                self.emit(Action.DISCARD_EDGE, edge, "Edge discarded",
                          "This edge connects two nodes that are already in the visited set. "
                          "Adding it would create a cycle, so it is ignored.")


def run_prim(graph: Graph, start_node_id: Optional[NodeId] = None, forest: bool = True) -> StepLog:
    """Run Prim's algorithm from ``start_node_id`` and return its step log.

    An unknown start node is replaced by the first node of the graph and the
    substitution is recorded in ``StepLog.warnings``. When the graph is
    disconnected and ``forest`` is true, a new tree is started from the first
    unvisited node each time the frontier runs dry, so the log spans every
    component; with ``forest=False`` only the start node's component is
    spanned.
    """
    if not graph.nodes:
        raise InvalidInput("Cannot start Prim's algorithm on an empty graph.")

    run = _PrimRun(graph)
    if start_node_id is None:
        start_node_id = graph.nodes[0].id
    elif not graph.has_node(start_node_id):
        fallback = graph.nodes[0]
        message = (f"Invalid start node {start_node_id!r} selected, "
                   f"defaulting to the first node ({fallback.label}).")
        logger.warning(message)
        run.log.warnings.append(message)
        start_node_id = fallback.id
    run.log.start_node = start_node_id

    run.seed(start_node_id, first=True)
    run.grow()
    while forest and len(run.visited) < len(graph.nodes):
        next_root = next(n.id for n in graph.nodes if not run.is_visited(n.id))
        run.seed(next_root, first=False)
        run.grow()

    accepted = run.accepted
    if accepted < len(graph.nodes) - 1:
        if len(run.visited) < len(graph.nodes):
            run.emit(Action.NONE, None, "Algorithm finished (partial)",
                     f"The priority queue is empty but only {len(run.visited)} of {len(graph.nodes)} "
                     "nodes were reached. The graph is disconnected, so the result is a spanning "
                     "tree of the start node's component only.")
        else:
            run.emit(Action.NONE, None, "Algorithm finished (forest)",
                     "Every node has been visited, but the graph is disconnected. "
                     f"The result is a minimum spanning forest with {accepted} edges.")
    else:
        run.emit(Action.NONE, None, "Algorithm finished",
                 "No more valid edges can be added. The Minimum Spanning Tree is complete.")

    log = run.log.freeze()
    logger.info("Prim from %s: %d steps, %d edges accepted, total weight %d",
                graph.label(start_node_id), len(log), len(log.accepted_edges()), log.total_weight())
    return log
