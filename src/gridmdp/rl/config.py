from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.io import load_yaml
from .maps import Domain, GridMap


@dataclass
class SolverConfig:
    # shared
    gamma: float = 0.9
    max_sweeps: Optional[int] = None  # external cap for VI; None = run to convergence

    # sampling solvers
    episodes: int = 500
    alpha: float = 0.5
    epsilon: float = 0.1
    max_steps: int = 100
    first_visit: bool = True
    seed: Optional[int] = 0

    # setup
    max_states: Optional[int] = 1_000_000

    # logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SolverConfig":
        max_sweeps = d.get("max_sweeps")
        seed = d.get("seed", 0)
        max_states = d.get("max_states", 1_000_000)
        return cls(
            gamma=float(d.get("gamma", 0.9)),
            max_sweeps=int(max_sweeps) if max_sweeps is not None else None,
            episodes=int(d.get("episodes", 500)),
            alpha=float(d.get("alpha", 0.5)),
            epsilon=float(d.get("epsilon", 0.1)),
            max_steps=int(d.get("max_steps", 100)),
            first_visit=bool(d.get("first_visit", True)),
            seed=int(seed) if seed is not None else None,
            max_states=int(max_states) if max_states is not None else None,
            log_level=str(d.get("log_level", "INFO")),
            log_file=d.get("log_file"),
        )


@dataclass
class RunConfig:
    map: GridMap
    domain: Domain = Domain.GRID_WORLD
    solver: SolverConfig = field(default_factory=SolverConfig)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RunConfig":
        m = d.get("map", {})
        return cls(
            map=GridMap.from_dict(m),
            domain=Domain.parse(m.get("domain", d.get("domain", "gridworld"))),
            solver=SolverConfig.from_dict(d.get("solver") or {}),
        )


def load_run_config(path: Path | str) -> RunConfig:
    """
    YAML layout:

        map:
          domain: sokoban
          width: 5
          height: 3
          start: [1, 1]
          crates: [[2, 1]]
          targets: [[3, 1]]
        solver:
          gamma: 0.9
          seed: 0
    """
    return RunConfig.from_dict(load_yaml(path) or {})
