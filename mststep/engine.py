"""Algorithm selection."""

from enum import Enum
from typing import Optional, Union

from .errors import InvalidInput
from .graph import Graph, NodeId
from .kruskal import run_kruskal
from .prim import run_prim
from .steps import StepLog


class Algorithm(str, Enum):
    PRIM = "prim"
    KRUSKAL = "kruskal"

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise InvalidInput(f"Unknown algorithm {value!r} (choose from: {choices})") from None


def run(graph: Graph, algorithm: Union[Algorithm, str],
        start_node_id: Optional[NodeId] = None, forest: bool = True) -> StepLog:
    """Produce a fresh step log for ``algorithm`` over ``graph``.

    With ``forest=False`` Prim only spans the start node's component.
    """
    algorithm = Algorithm.parse(algorithm)
    if algorithm is Algorithm.PRIM:
        return run_prim(graph, start_node_id, forest=forest)
    return run_kruskal(graph)
