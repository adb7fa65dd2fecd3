"""Forward/backward replay of a step log against a graph.

The navigator is the only writer of ``Edge.in_mst``. At every cursor
position the set of flagged edges equals the ``addEdge`` steps in
``log[0:cursor]``; stepping backward restores that by clearing every flag
and replaying the log prefix.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import InvalidInput, NavigationBoundary
from .graph import EdgeKey, Graph
from .steps import Action, Snapshot, StepLog

logger = logging.getLogger(__name__)


class Status(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class View:
    """Everything a renderer needs to redraw after a transition."""

    status: Status
    index: int  # cursor; the step shown is log[index - 1]
    total: int
    action: Optional[Action]
    edge: Optional[EdgeKey]
    headline: str
    narrative: str
    snapshot: Optional[Snapshot]
    mst_edges: Tuple[EdgeKey, ...]
    total_weight: int
    partial: bool = False


class Navigator:
    def __init__(self, graph: Graph, log: Optional[StepLog] = None) -> None:
        self.graph = graph
        self._log: Optional[StepLog] = None
        self._cursor = 0
        if log is not None:
            self.load(log)

    @property
    def log(self) -> Optional[StepLog]:
        return self._log

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._log) if self._log is not None else 0

    @property
    def at_start(self) -> bool:
        return self._cursor == 0

    @property
    def at_end(self) -> bool:
        return self._cursor >= len(self)

    def load(self, log: StepLog) -> None:
        """Start a new run: previous log dropped, cursor and MST flags reset."""
        for edge in log.accepted_edges():
            found = self.graph.find_edge(edge.u, edge.v)
            if found is None:
                raise InvalidInput(f"Log accepts edge {edge.u}-{edge.v} which is not in the graph")
            if found.weight != edge.weight:
                raise InvalidInput(f"Log accepts edge {edge.u}-{edge.v} with weight {edge.weight}, "
                                   f"graph has {found.weight}")
        self.reset()
        self._log = log

    def reset(self) -> None:
        self._log = None
        self._cursor = 0
        self.graph.clear_mst()

    def _apply(self, index: int) -> None:
        step = self._log[index]
        if step.action is Action.ADD_EDGE:
            self.graph.find_edge(step.edge.u, step.edge.v).in_mst = True

    def step_forward(self, strict: bool = False) -> bool:
        if self.at_end:
            logger.debug("step_forward ignored: at end of log (cursor=%d)", self._cursor)
            if strict:
                raise NavigationBoundary("forward", self._cursor)
            return False
        self._apply(self._cursor)
        self._cursor += 1
        return True

    def step_backward(self, strict: bool = False) -> bool:
        if self.at_start:
            logger.debug("step_backward ignored: at start of log")
            if strict:
                raise NavigationBoundary("backward", self._cursor)
            return False
        self._replay_to(self._cursor - 1)
        return True

    def seek(self, index: int) -> int:
        """Jump to ``index`` (clamped to ``0..len(log)``) and return the new cursor."""
        index = max(0, min(index, len(self)))
        if index >= self._cursor:
            while self._cursor < index:
                self.step_forward()
        else:
            self._replay_to(index)
        return self._cursor

    def _replay_to(self, index: int) -> None:
        self.graph.clear_mst()
        self._cursor = 0
        for i in range(index):
            self._apply(i)
        self._cursor = index

    def current_view(self) -> View:
        mst = tuple(edge.key() for edge in self.graph.mst_edges)
        weight = self.graph.total_weight
        total = len(self)
        if self._log is None or self._cursor == 0:
            return View(Status.NOT_STARTED, 0, total, None, None, "Ready to visualize",
                        "Generate a graph, then start a run to see the steps here.",
                        None, mst, weight)

        step = self._log[self._cursor - 1]
        if not self.at_end:
            return View(Status.IN_PROGRESS, self._cursor, total, step.action, step.edge,
                        step.headline, step.narrative, step.snapshot, mst, weight)

        partial = len(mst) < len(self.graph.nodes) - 1
        if partial:
            narrative = (f"{step.narrative} Partial result: {len(mst)} edges with total weight "
                         f"{weight}; a spanning tree of {len(self.graph.nodes)} nodes needs "
                         f"{len(self.graph.nodes) - 1}.")
        else:
            narrative = f"{step.narrative} MST has {len(mst)} edges with total weight {weight}."
        return View(Status.COMPLETE, self._cursor, total, step.action, step.edge,
                    step.headline, narrative, step.snapshot, mst, weight, partial=partial)
