import itertools

import matplotlib

matplotlib.use("Agg")

import networkx as nx
import pytest

from mststep.graph import Graph


def brute_force_mst_weight(graph: Graph) -> int:
    """Minimum total weight over every spanning forest of ``graph``."""
    G = graph.to_networkx()
    size = G.number_of_nodes() - nx.number_connected_components(G)
    best = None
    for subset in itertools.combinations(G.edges(data="weight"), size):
        H = nx.Graph()
        H.add_nodes_from(G)
        H.add_weighted_edges_from(subset)
        if nx.is_forest(H) and nx.number_connected_components(H) == nx.number_connected_components(G):
            weight = sum(w for _, _, w in subset)
            best = weight if best is None else min(best, weight)
    return best or 0


@pytest.fixture
def square_graph() -> Graph:
    # A-B:1, B-C:2, C-D:3, A-D:10, A-C:5
    return Graph.from_edge_list("ABCD", [("A", "B", 1), ("B", "C", 2), ("C", "D", 3),
                                         ("A", "D", 10), ("A", "C", 5)])


@pytest.fixture
def tie_graph() -> Graph:
    return Graph.from_edge_list("ABC", [("A", "B", 5), ("A", "C", 5), ("B", "C", 1)])


@pytest.fixture
def split_graph() -> Graph:
    """Two components: A-B-C (a triangle) and D-E."""
    return Graph.from_edge_list("ABCDE", [("A", "B", 4), ("B", "C", 2), ("A", "C", 3), ("D", "E", 7)])


@pytest.fixture
def stale_graph() -> Graph:
    """Prim from A dequeues B-C after both ends are visited."""
    return Graph.from_edge_list("ABCD", [("A", "B", 1), ("A", "C", 2), ("B", "C", 3), ("C", "D", 4)])
