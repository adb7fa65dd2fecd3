import networkx as nx
import pytest

from mststep.errors import InvalidInput
from mststep.graph import EdgeKey, Graph


def test_from_edge_list_accepts_labels_and_ids():
    g = Graph.from_edge_list(["A", "B", "C"], [("A", "B", 3), (1, 2, 4)])
    assert [n.id for n in g.nodes] == [0, 1, 2]
    assert g.find_edge(1, 0).weight == 3
    assert g.find_edge(2, 1).weight == 4
    assert g.find_edge(0, 2) is None


@pytest.mark.parametrize("u, v, w", [(0, 0, 1), (0, 9, 1), (0, 1, 0), (0, 1, 2.5)])
def test_add_edge_rejects_invalid(u, v, w):
    g = Graph.from_edge_list("AB", [])
    with pytest.raises(InvalidInput):
        g.add_edge(u, v, w)


def test_duplicate_unordered_pair_rejected():
    g = Graph.from_edge_list("AB", [("A", "B", 1)])
    with pytest.raises(InvalidInput):
        g.add_edge(1, 0, 2)


def test_mst_set_is_derived_from_flags(square_graph):
    square_graph.find_edge(0, 1).in_mst = True
    square_graph.find_edge(2, 3).in_mst = True
    assert [e.pair for e in square_graph.mst_edges] == [(0, 1), (2, 3)]
    assert square_graph.total_weight == 4
    square_graph.clear_mst()
    assert square_graph.mst_edges == []


def test_copy_is_independent(square_graph):
    clone = square_graph.copy()
    clone.find_edge(0, 1).in_mst = True
    assert square_graph.total_weight == 0
    assert clone.total_weight == 1


def test_resolve_label_and_id(square_graph):
    assert square_graph.resolve("C") == 2
    assert square_graph.resolve(3) == 3
    assert square_graph.resolve("1") == 1
    with pytest.raises(InvalidInput):
        square_graph.resolve("Z")


def test_edge_key_pair_is_unordered():
    assert EdgeKey(3, 1, 5).pair == (1, 3)
    assert EdgeKey(3, 1, 5).other(3) == 1


def test_networkx_roundtrip_keeps_weights_and_labels(square_graph):
    G = square_graph.to_networkx()
    assert G[0][3]["weight"] == 10
    back = Graph.from_networkx(G)
    assert [n.label for n in back.nodes] == ["A", "B", "C", "D"]
    assert sorted((e.pair, e.weight) for e in back.edges) == sorted((e.pair, e.weight) for e in square_graph.edges)


def test_from_networkx_rejects_directed():
    with pytest.raises(InvalidInput):
        Graph.from_networkx(nx.DiGraph([(0, 1)]))


def test_node_lookup_and_neighbors(square_graph):
    assert square_graph.node(2).label == "C"
    assert square_graph.label(99) == "?"
    assert square_graph.neighbors(0) == [1, 3, 2]
    with pytest.raises(InvalidInput):
        square_graph.node(99)
