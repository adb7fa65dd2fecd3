import logging

import pytest

from conftest import brute_force_mst_weight
from mststep.errors import InvalidInput
from mststep.generate import generate
from mststep.graph import Graph
from mststep.prim import run_prim
from mststep.steps import Action, PrimSnapshot


def pairs(edges):
    return [e.pair for e in edges]


def test_square_from_a(square_graph):
    log = run_prim(square_graph, 0)
    assert pairs(log.accepted_edges()) == [(0, 1), (1, 2), (2, 3)]
    assert log.total_weight() == 6
    assert not log.is_forest()
    assert [s.action for s in log] == [
        Action.NONE,
        Action.CONSIDER_EDGE, Action.ADD_EDGE, Action.NONE,
        Action.CONSIDER_EDGE, Action.ADD_EDGE, Action.NONE,
        Action.CONSIDER_EDGE, Action.ADD_EDGE, Action.NONE,
        Action.NONE,
    ]


def test_snapshots_reflect_state_after_each_step(square_graph):
    log = run_prim(square_graph, 0)
    start, consider, add, update = log[0], log[1], log[2], log[3]
    assert isinstance(start.snapshot, PrimSnapshot)
    assert [(e.pair, e.weight) for e in start.snapshot.frontier] == [((0, 1), 1), ((0, 2), 5), ((0, 3), 10)]
    assert start.snapshot.visited == (0,)
    # dequeued edge is gone from the frontier already
    assert pairs(consider.snapshot.frontier) == [(0, 2), (0, 3)]
    assert consider.snapshot.visited == (0,)
    assert add.snapshot.visited == (0, 1)
    assert pairs(update.snapshot.frontier) == [(1, 2), (0, 2), (0, 3)]


def test_emitted_snapshots_are_immutable(square_graph):
    log = run_prim(square_graph, 0)
    assert pairs(log[0].snapshot.frontier) == [(0, 1), (0, 2), (0, 3)]
    with pytest.raises(AttributeError):
        log[0].snapshot.frontier.append(None)


def test_stale_frontier_entry_is_discarded(stale_graph):
    log = run_prim(stale_graph, 0)
    discards = [s for s in log if s.action is Action.DISCARD_EDGE]
    assert [s.edge.pair for s in discards] == [(1, 2)]
    # considered first, then discarded
    i = log.steps.index(discards[0])
    assert log[i - 1].action is Action.CONSIDER_EDGE and log[i - 1].edge == discards[0].edge
    assert log.total_weight() == 7


def test_weight_tie_keeps_insertion_order(tie_graph):
    log = run_prim(tie_graph, 0)
    assert pairs(log.accepted_edges()) == [(0, 1), (1, 2)]
    assert log.total_weight() == 6


def test_unknown_start_falls_back_to_first_node(square_graph, caplog):
    with caplog.at_level(logging.WARNING, logger="mststep.prim"):
        log = run_prim(square_graph, 42)
    assert log.start_node == 0
    assert len(log.warnings) == 1
    assert "defaulting to the first node (A)" in log.warnings[0]
    assert "Invalid start node" in caplog.text
    assert log.total_weight() == 6


def test_default_start_is_first_node(square_graph):
    log = run_prim(square_graph)
    assert log.start_node == 0
    assert log.warnings == ()


def test_empty_graph_is_invalid():
    with pytest.raises(InvalidInput):
        run_prim(Graph(), 0)


def test_single_node_graph():
    log = run_prim(Graph.from_edge_list("A", []), 0)
    assert log.accepted_edges() == []
    assert not log.is_forest()
    assert log[-1].headline == "Algorithm finished"


def test_disconnected_builds_forest_by_default(split_graph):
    log = run_prim(split_graph, 0)
    assert len(log.accepted_edges()) == 3
    assert log.is_forest()
    assert log.total_weight() == 2 + 3 + 7
    restarts = [s for s in log if s.headline.startswith("Starting a new tree")]
    assert len(restarts) == 1 and restarts[0].snapshot.visited[-1] == 3
    assert "forest" in log[-1].headline


def test_disconnected_single_tree_stops_at_component(split_graph):
    log = run_prim(split_graph, 0, forest=False)
    assert pairs(log.accepted_edges()) == [(0, 2), (1, 2)]
    assert log.is_forest()
    assert log[-1].snapshot.visited == (0, 2, 1)
    assert "partial" in log[-1].headline


@pytest.mark.parametrize("seed", range(12))
def test_matches_brute_force_weight(seed):
    graph = generate("random", 3 + seed % 4, density=0.6, seed=seed)
    log = run_prim(graph, graph.nodes[seed % len(graph.nodes)].id)
    assert len(log.accepted_edges()) == len(graph.nodes) - 1
    assert log.total_weight() == brute_force_mst_weight(graph)
