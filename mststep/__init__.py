"""Step-by-step Prim and Kruskal minimum spanning tree runs with replay."""

from .engine import Algorithm, run
from .errors import InvalidInput, MSTError, NavigationBoundary
from .graph import Edge, EdgeKey, Graph, Node
from .kruskal import DisjointSet, run_kruskal
from .navigator import Navigator, Status, View
from .playback import ManualTickSource, PlaybackScheduler
from .prim import run_prim
from .steps import Action, KruskalSnapshot, PrimSnapshot, Step, StepLog

__all__ = [
    "Action",
    "Algorithm",
    "DisjointSet",
    "Edge",
    "EdgeKey",
    "Graph",
    "InvalidInput",
    "KruskalSnapshot",
    "MSTError",
    "ManualTickSource",
    "NavigationBoundary",
    "Navigator",
    "Node",
    "PlaybackScheduler",
    "PrimSnapshot",
    "Status",
    "Step",
    "StepLog",
    "View",
    "run",
    "run_kruskal",
    "run_prim",
]
