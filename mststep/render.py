"""Drawing a navigator view with networkx + matplotlib, and text summaries."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from .graph import Graph
from .navigator import Navigator, Status, View
from .steps import Action, KruskalSnapshot, PrimSnapshot, StepLog

logger = logging.getLogger(__name__)

# Define colors
DEFAULT_NODE_COLOR = '#a3a3a3'
VISITED_NODE_COLOR = '#f59e0b'  # Amber
DEFAULT_EDGE_COLOR = '#d4d4d4'
MST_EDGE_COLOR = '#10b981'  # Emerald
CONSIDERING_EDGE_COLOR = '#3b82f6'  # Blue
REJECTED_EDGE_COLOR = '#ef4444'  # Red


def describe_snapshot(graph: Graph, snapshot) -> List[str]:
    """Text lines for the data-structure panel of either algorithm."""
    if snapshot is None:
        return []
    if isinstance(snapshot, PrimSnapshot):
        queue = [f"{graph.edge_name(e)} ({e.weight})" for e in snapshot.frontier] or ["Empty"]
        visited = ", ".join(graph.label(n) for n in sorted(snapshot.visited))
        return ["Priority Queue:"] + [f"  {item}" for item in queue] + [f"Visited Nodes: {{{visited}}}"]
    if isinstance(snapshot, KruskalSnapshot):
        lines = ["Disjoint Sets:"]
        for i, members in enumerate(snapshot.partition):
            lines.append(f"  Set {i}: {{{', '.join(graph.label(n) for n in members)}}}")
        remaining = [f"{graph.edge_name(e)} ({e.weight})" for e in snapshot.remaining] or ["Empty"]
        return lines + ["Sorted Edges:"] + [f"  {item}" for item in remaining]
    raise TypeError(f"Unknown snapshot type {type(snapshot).__name__}")


def describe_view(graph: Graph, view: View) -> List[str]:
    if view.status is Status.NOT_STARTED:
        header = view.headline
    else:
        header = f"[{view.index}/{view.total}] {view.headline}"
    lines = [header, view.narrative]
    lines += describe_snapshot(graph, view.snapshot)
    mst = ", ".join(f"{graph.edge_name(e)} ({e.weight})" for e in view.mst_edges) or "none"
    lines.append(f"MST edges: {mst} | total weight = {view.total_weight}")
    return lines


def layout(graph: Graph) -> Dict[int, Tuple[float, float]]:
    """Node positions; falls back to a seeded spring layout when none are set."""
    if any(node.x or node.y for node in graph.nodes):
        return {node.id: (node.x, node.y) for node in graph.nodes}
    return nx.spring_layout(graph.to_networkx(), seed=42)  # Seed for reproducible layouts


def draw_view(ax, graph: Graph, view: View, pos: Optional[Dict] = None) -> None:
    """Draw one navigator view onto ``ax``."""
    G = graph.to_networkx()
    pos = pos or layout(graph)
    ax.clear()

    # --- Draw Nodes ---
    visited = set()
    if isinstance(view.snapshot, PrimSnapshot):
        visited = set(view.snapshot.visited)
    node_colors = [VISITED_NODE_COLOR if n in visited else DEFAULT_NODE_COLOR for n in G.nodes()]
    nx.draw_networkx_nodes(G, pos, ax=ax, node_color=node_colors, node_size=700)

    # --- Draw Edges ---
    nx.draw_networkx_edges(G, pos, ax=ax, edge_color=DEFAULT_EDGE_COLOR, width=1.5)
    if view.mst_edges:
        nx.draw_networkx_edges(G, pos, ax=ax, edgelist=[(e.u, e.v) for e in view.mst_edges],
                               edge_color=MST_EDGE_COLOR, width=3.0)

    # Highlight the considered/rejected edge
    if view.edge is not None and view.status is not Status.COMPLETE:
        color = CONSIDERING_EDGE_COLOR
        if view.action is Action.ADD_EDGE:
            color = MST_EDGE_COLOR
        elif view.action is Action.DISCARD_EDGE:
            color = REJECTED_EDGE_COLOR
        nx.draw_networkx_edges(G, pos, ax=ax, edgelist=[(view.edge.u, view.edge.v)],
                               edge_color=color, width=3.5, style='dashed')

    # --- Draw Labels ---
    labels = {node.id: node.label for node in graph.nodes}
    nx.draw_networkx_labels(G, pos, labels=labels, ax=ax, font_size=12,
                            font_color='white', font_weight='bold')
    nx.draw_networkx_edge_labels(G, pos, edge_labels=nx.get_edge_attributes(G, 'weight'),
                                 ax=ax, font_color='black')

    title = view.headline
    if view.status is Status.COMPLETE:
        title = f"{title} | Total Weight: {view.total_weight}"
    ax.set_title(title, fontsize=14)
    ax.set_axis_off()


def animate(graph: Graph, log: StepLog, pause: float = 1.5, title: Optional[str] = None) -> View:
    """Play a whole run in a matplotlib window, one step per ``pause`` seconds."""
    navigator = Navigator(graph, log)
    pos = layout(graph)
    fig, ax = plt.subplots(figsize=(10, 8))
    fig.canvas.manager.set_window_title(title or f"{log.algorithm.title()}'s Algorithm Visualization")

    draw_view(ax, graph, navigator.current_view(), pos)
    plt.pause(pause)
    while navigator.step_forward():
        draw_view(ax, graph, navigator.current_view(), pos)
        plt.tight_layout()
        plt.pause(pause)  # Pause to create animation effect

    plt.show()
    return navigator.current_view()


def save_frames(graph: Graph, log: StepLog, directory, dpi: int = 80) -> List[Path]:
    """Render every cursor position of ``log`` to ``step_XXX.png`` files."""
    out = Path(directory)
    out.mkdir(parents=True, exist_ok=True)
    navigator = Navigator(graph, log)
    pos = layout(graph)
    fig, ax = plt.subplots(figsize=(10, 8))
    paths = []
    try:
        while True:
            draw_view(ax, graph, navigator.current_view(), pos)
            path = out / f"step_{navigator.cursor:03d}.png"
            fig.savefig(path, dpi=dpi)
            paths.append(path)
            if not navigator.step_forward():
                break
    finally:
        plt.close(fig)
    logger.info("Wrote %d frames to %s", len(paths), out)
    return paths
