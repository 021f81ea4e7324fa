from __future__ import annotations
import math
from dataclasses import dataclass, field, fields
from typing import List, Optional

import yaml


@dataclass
class SolverConfig:
    time_limit: float = 300.0      # seconds for construction + optimization
    nn_starts: int = 35            # sampled nearest-neighbor starts on large instances
    exhaustive_below: int = 250    # below this size every city is tried as a start
    record_tours: bool = False     # keep the tour after every 2-opt pass (for plots)

    def __post_init__(self):
        for name in ("nn_starts", "exhaustive_below"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}.")
        if isinstance(self.time_limit, bool) or not isinstance(self.time_limit, (int, float)):
            raise ValueError(f"time_limit must be a number, got {self.time_limit!r}.")
        if self.time_limit < 0:
            raise ValueError("time_limit must be >= 0.")
        if self.nn_starts <= 0:
            raise ValueError("nn_starts must be positive.")
        if self.exhaustive_below < 0:
            raise ValueError("exhaustive_below must be >= 0.")

    @classmethod
    def from_yaml(cls, path: str, **overrides) -> "SolverConfig":
        """Load a config from a YAML mapping of field names; `overrides` win."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping of config fields")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"{path}: unknown config keys {unknown}")
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)


@dataclass
class Tour:
    order: List[int] = field(default_factory=list)
    cost: float = math.inf

    def is_complete(self, n: int) -> bool:
        return len(self.order) == n and self.cost != math.inf


@dataclass
class SolveResult:
    tour: List[int]
    cost: float
    initial_cost: float
    timed_out: bool
    converged: bool
    history_costs: List[float]
    config: SolverConfig
    elapsed_sec: float
    history_tours: Optional[List[List[int]]] = None
