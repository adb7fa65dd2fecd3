"""Step records and the frozen step log produced by an engine run.

Every Step carries a snapshot of the algorithm's auxiliary state *after*
the step's action took effect. Snapshots hold tuples only, so a Step that
has been emitted can never change when the engine keeps mutating its own
working lists.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .graph import EdgeKey, NodeId


class Action(str, Enum):
    NONE = "none"
    CONSIDER_EDGE = "considerEdge"
    ADD_EDGE = "addEdge"
    DISCARD_EDGE = "discardEdge"


@dataclass(frozen=True)
class PrimSnapshot:
    frontier: Tuple[EdgeKey, ...]  # ascending weight, insertion order on ties
    visited: Tuple[NodeId, ...]  # in visiting order


@dataclass(frozen=True)
class KruskalSnapshot:
    remaining: Tuple[EdgeKey, ...]  # sorted edges not yet considered
    partition: Tuple[Tuple[NodeId, ...], ...]


Snapshot = Union[PrimSnapshot, KruskalSnapshot]


@dataclass(frozen=True)
class Step:
    action: Action
    edge: Optional[EdgeKey]
    headline: str
    narrative: str
    snapshot: Snapshot


class StepLog(Sequence[Step]):
    """Ordered, read-only record of one algorithm run."""

    def __init__(self, algorithm: str, steps: Sequence[Step], node_count: int,
                 start_node: Optional[NodeId] = None,
                 warnings: Sequence[str] = ()) -> None:
        self.algorithm = algorithm
        self.node_count = node_count
        self.start_node = start_node
        self.warnings: Tuple[str, ...] = tuple(warnings)
        self._steps: Tuple[Step, ...] = tuple(steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index):
        return self._steps[index]

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __repr__(self) -> str:
        return f"StepLog({self.algorithm!r}, steps={len(self._steps)})"

    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    def accepted_edges(self, upto: Optional[int] = None) -> List[EdgeKey]:
        """Edges of ``addEdge`` steps in ``log[0:upto]``, in acceptance order."""
        steps = self._steps if upto is None else self._steps[:upto]
        return [step.edge for step in steps if step.action is Action.ADD_EDGE]

    def total_weight(self) -> int:
        return sum(edge.weight for edge in self.accepted_edges())

    def is_forest(self) -> bool:
        """True when the run could not span every node with one tree."""
        return len(self.accepted_edges()) < max(self.node_count - 1, 0)


class StepLogBuilder:
    """Append-only recorder used by the engines while they run."""

    def __init__(self, algorithm: str, node_count: int) -> None:
        self.algorithm = algorithm
        self.node_count = node_count
        self.start_node: Optional[NodeId] = None
        self.warnings: List[str] = []
        self._steps: List[Step] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._steps)

    def emit(self, action: Action, edge: Optional[EdgeKey], headline: str,
             narrative: str, snapshot: Snapshot) -> Step:
        if self._frozen:
            raise RuntimeError("StepLog is frozen; no further steps may be recorded")
        step = Step(action, edge, headline, narrative, snapshot)
        self._steps.append(step)
        return step

    def freeze(self) -> StepLog:
        self._frozen = True
        return StepLog(self.algorithm, self._steps, self.node_count,
                       start_node=self.start_node, warnings=self.warnings)
