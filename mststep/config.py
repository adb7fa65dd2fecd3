from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml
from dotenv import load_dotenv

from .engine import Algorithm
from .errors import InvalidInput
from .playback import MAX_SPEED, MIN_SPEED

GRAPH_TYPES = ("random", "cycle", "complete")


def _to_bool(val: str | bool | None, default: bool) -> bool:
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return str(val).lower() in {"1", "true", "yes", "on"}


def _coerce(name: str, fn: Callable[[Any], Any], raw: Any) -> Any:
    try:
        return fn(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{name}: expected {fn.__name__}, got {raw!r}") from exc


def _optional_int(name: str, val: Any) -> Optional[int]:
    if val is None or val == "":
        return None
    return _coerce(name, int, val)


@dataclass
class VisualizerConfig:
    algorithm: str = Algorithm.PRIM.value
    start_node: Optional[str] = None  # label or id; None = first node
    speed: int = 5
    graph_type: str = "random"
    node_count: int = 6
    edge_density: float = 0.4
    seed: Optional[int] = None
    forest: bool = True  # Prim restarts in unreached components
    log_level: str = "INFO"

    def validate(self) -> "VisualizerConfig":
        self.algorithm = Algorithm.parse(self.algorithm).value
        if not MIN_SPEED <= self.speed <= MAX_SPEED:
            raise InvalidInput(f"speed must be between {MIN_SPEED} and {MAX_SPEED}, got {self.speed}")
        if self.graph_type not in GRAPH_TYPES:
            raise InvalidInput(f"graph_type must be one of {', '.join(GRAPH_TYPES)}, got {self.graph_type!r}")
        if self.node_count < 1:
            raise InvalidInput(f"node_count must be positive, got {self.node_count}")
        if not 0.0 <= self.edge_density <= 1.0:
            raise InvalidInput(f"edge_density must be within [0, 1], got {self.edge_density}")
        self.log_level = self.log_level.upper()
        return self


def load_config(path: str | Path | None = None) -> VisualizerConfig:
    """Read settings from an optional YAML file, then apply ``MST_*`` env overrides."""
    load_dotenv(override=False)
    y: Dict[str, Any] = {}
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f) or {}
        if not isinstance(y, dict):
            raise InvalidInput(f"{path}: expected a mapping at the top level")

    graph = y.get("graph", {}) or {}

    config = VisualizerConfig(
        algorithm=os.getenv("MST_ALGORITHM", y.get("algorithm", Algorithm.PRIM.value)),
        start_node=os.getenv("MST_START_NODE") or (
            str(y["start_node"]) if y.get("start_node") is not None else None),
        speed=_coerce("speed", int, os.getenv("MST_SPEED", y.get("speed", 5))),
        graph_type=os.getenv("MST_GRAPH_TYPE", graph.get("type", "random")),
        node_count=_coerce("nodes", int, os.getenv("MST_NODES", graph.get("nodes", 6))),
        edge_density=_coerce("density", float, os.getenv("MST_DENSITY", graph.get("density", 0.4))),
        seed=_optional_int("seed", os.getenv("MST_SEED", y.get("seed"))),
        forest=_to_bool(os.getenv("MST_FOREST"), y.get("forest", True)),
        log_level=os.getenv("MST_LOG_LEVEL", y.get("log_level", "INFO")),
    )
    return config.validate()
