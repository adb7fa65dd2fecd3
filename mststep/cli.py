"""Console entrypoint for the ``mststep`` command."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import GRAPH_TYPES, VisualizerConfig, load_config
from .engine import Algorithm, run
from .errors import InvalidInput, MSTError
from .generate import generate
from .graph import Graph
from .navigator import Navigator

logger = logging.getLogger(__name__)


def resolve_start(graph: Graph, ref: Optional[str]):
    if ref is None:
        return None
    try:
        return graph.resolve(ref)
    except InvalidInput:
        return ref  # run_prim falls back to the first node and warns


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mststep", description="Step through Prim's or Kruskal's MST algorithm")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--algorithm", choices=[a.value for a in Algorithm])
    parser.add_argument("--start", help="Prim start node (label or id)")
    parser.add_argument("--nodes", type=int, help="Number of nodes to generate")
    parser.add_argument("--type", dest="graph_type", choices=GRAPH_TYPES, help="Kind of graph to generate")
    parser.add_argument("--density", type=float, help="Edge density in [0, 1]")
    parser.add_argument("--seed", type=int, help="Random seed for graph generation")
    parser.add_argument("--single-tree", action="store_true",
                        help="Prim only spans the start node's component")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--print", dest="mode", action="store_const", const="print",
                      help="Print every step as text (default)")
    mode.add_argument("--show", dest="mode", action="store_const", const="show",
                      help="Animate the run in a matplotlib window")
    mode.add_argument("--save", metavar="DIR", help="Write one PNG per step into DIR")
    mode.add_argument("--gui", dest="mode", action="store_const", const="gui",
                      help="Open the interactive Tk stepper")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def apply_overrides(config: VisualizerConfig, args: argparse.Namespace) -> VisualizerConfig:
    if args.algorithm:
        config.algorithm = args.algorithm
    if args.start is not None:
        config.start_node = args.start
    if args.nodes is not None:
        config.node_count = args.nodes
    if args.graph_type:
        config.graph_type = args.graph_type
    if args.density is not None:
        config.edge_density = args.density
    if args.seed is not None:
        config.seed = args.seed
    if args.single_tree:
        config.forest = False
    if args.verbose:
        config.log_level = "DEBUG"
    return config.validate()


def print_run(graph: Graph, config: VisualizerConfig, out=None) -> int:
    """Print every step of a run; returns the MST total weight."""
    from .render import describe_view

    out = out or sys.stdout
    start = resolve_start(graph, config.start_node)
    log = run(graph, config.algorithm, start, forest=config.forest)
    for warning in log.warnings:
        print(f"warning: {warning}", file=out)

    navigator = Navigator(graph.copy(), log)
    while navigator.step_forward():
        print("\n".join(describe_view(navigator.graph, navigator.current_view())), file=out)
        print(file=out)
    view = navigator.current_view()
    status = "partial forest" if view.partial else "spanning tree"
    print(f"{log.algorithm}: {len(view.mst_edges)} edges, total weight {view.total_weight} ({status})", file=out)
    return view.total_weight


def main(argv: Optional[List[str]] = None) -> int:
    """Parse ``mststep`` CLI arguments and dispatch to the selected mode."""
    args = build_parser().parse_args(argv)
    try:
        config = apply_overrides(load_config(args.config), args)
        logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

        if args.mode == "gui":
            from .app import main as run_app

            run_app(config)
            return 0

        graph = generate(config.graph_type, config.node_count, config.edge_density, config.seed)
        if args.mode == "show" or args.save:
            from .render import animate, save_frames

            start = resolve_start(graph, config.start_node)
            log = run(graph, config.algorithm, start, forest=config.forest)
            if args.save:
                save_frames(graph.copy(), log, args.save)
            else:
                animate(graph.copy(), log)
            return 0

        print_run(graph, config)
        return 0
    except (MSTError, OSError) as exc:
        logger.debug("aborted", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2
