"""Random graph builders for the visualizer (random, cycle and complete graphs)."""

import logging
import random
import string
from typing import Optional

import networkx as nx

from .errors import InvalidInput
from .graph import Graph
from .kruskal import DisjointSet

logger = logging.getLogger(__name__)


def node_label(i: int) -> str:
    letters = string.ascii_uppercase
    if i < len(letters):
        return letters[i]
    return f"{letters[i % len(letters)]}{i // len(letters)}"


def _new_graph(n: int) -> nx.Graph:
    if n < 1:
        raise InvalidInput(f"Node count must be positive, got {n}")
    G = nx.Graph()
    G.add_nodes_from((i, {"label": node_label(i)}) for i in range(n))
    return G


def _add_edge(G: nx.Graph, u: int, v: int, weight: int) -> bool:
    if u == v or G.has_edge(u, v):
        return False
    G.add_edge(u, v, weight=weight)
    return True


def _fill(G: nx.Graph, target: int, rng: random.Random, low: int, high: int) -> None:
    n = G.number_of_nodes()
    max_edges = n * (n - 1) // 2
    target = min(target, max_edges)
    while G.number_of_edges() < target:
        _add_edge(G, rng.randrange(n), rng.randrange(n), rng.randint(low, high))


def _finish(G: nx.Graph) -> Graph:
    pos = nx.circular_layout(G) if G.number_of_nodes() > 1 else {0: (0.0, 0.0)}
    graph = Graph.from_networkx(G, {n: (float(x), float(y)) for n, (x, y) in pos.items()})
    logger.debug("Generated %r", graph)
    return graph


def random_graph(n: int, density: float = 0.4, rng: Optional[random.Random] = None) -> Graph:
    """Connected random graph: random spanning tree plus extra edges up to ``density``."""
    rng = rng or random.Random()
    G = _new_graph(n)
    dsu = DisjointSet(range(n))
    sets = n
    while sets > 1:
        u, v = rng.randrange(n), rng.randrange(n)
        if dsu.find(u) != dsu.find(v):
            _add_edge(G, u, v, rng.randint(1, 20))
            dsu.union(u, v)
            sets -= 1
    _fill(G, int(n * (n - 1) / 2 * density), rng, 1, 20)
    return _finish(G)


def cycle_graph(n: int, density: float = 0.4, rng: Optional[random.Random] = None) -> Graph:
    """Ring of heavy edges with light chords, so Kruskal and Prim both meet cycles."""
    if n < 3:
        raise InvalidInput("Cycle graphs require at least 3 nodes.")
    rng = rng or random.Random()
    G = _new_graph(n)
    for i in range(n):
        _add_edge(G, i, (i + 1) % n, rng.randint(15, 24))
    for start in range(max(2, n // 2)):
        distance = rng.choice([2, 3, n // 2])
        _add_edge(G, start, (start + distance) % n, rng.randint(1, 3))
    target = max(n + 2, int(n * 1.5), int(n * (n - 1) / 2 * density))
    _fill(G, target, rng, 1, 24)
    return _finish(G)


def complete_graph(n: int, rng: Optional[random.Random] = None) -> Graph:
    rng = rng or random.Random()
    G = _new_graph(n)
    for u, v in nx.complete_graph(n).edges():
        G.add_edge(u, v, weight=rng.randint(1, 20))
    return _finish(G)


def generate(kind: str, n: int, density: float = 0.4, seed: Optional[int] = None) -> Graph:
    rng = random.Random(seed)
    if kind == "random":
        return random_graph(n, density, rng)
    if kind == "cycle":
        return cycle_graph(n, density, rng)
    if kind == "complete":
        return complete_graph(n, rng)
    raise InvalidInput(f"Unknown graph type {kind!r}")
