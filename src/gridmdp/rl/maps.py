from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from ..core.io import load_yaml
from .errors import ConfigurationError
from .types import Cell


class Domain(str, Enum):
    GRID_WORLD = "gridworld"
    SOKOBAN = "sokoban"

    @classmethod
    def parse(cls, tag: "str | Domain") -> "Domain":
        if isinstance(tag, Domain):
            return tag
        try:
            return cls(str(tag).lower().replace("-", "").replace("_", ""))
        except ValueError:
            raise ConfigurationError(
                f"unknown domain {tag!r}; expected one of {[d.value for d in cls]}"
            ) from None


def _cells(raw: Optional[Iterable[Iterable[int]]]) -> FrozenSet[Cell]:
    if not raw:
        return frozenset()
    return frozenset(_cell(c) for c in raw)


def _cell(raw: Iterable[int]) -> Cell:
    x, y = raw
    return int(x), int(y)


def _distinct_cells(kind: str, raw: Optional[Iterable[Iterable[int]]]) -> FrozenSet[Cell]:
    listed = [_cell(c) for c in raw or ()]
    cells = frozenset(listed)
    if len(cells) != len(listed):
        dup = sorted(c for c in cells if listed.count(c) > 1)
        raise ConfigurationError(f"duplicate {kind} cell(s) {dup}")
    return cells


@dataclass(frozen=True)
class GridMap:
    """
    Static puzzle definition, read-only for the engine.

    - Coordinates: (x, y), x=0..width-1 (left to right), y=0..height-1 (bottom to top)
    - obstacles: impassable cells
    - goal: grid-world terminal cell (unused by Sokoban)
    - crates / targets: Sokoban start crates and their destinations (unused by grid world)
    """

    width: int
    height: int
    start: Cell = (0, 0)
    obstacles: FrozenSet[Cell] = field(default_factory=frozenset)
    goal: Optional[Cell] = None
    crates: FrozenSet[Cell] = field(default_factory=frozenset)
    targets: FrozenSet[Cell] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # normalise list/tuple input so equality and hashing behave
        object.__setattr__(self, "start", _cell(self.start))
        object.__setattr__(self, "obstacles", _cells(self.obstacles))
        object.__setattr__(self, "crates", _distinct_cells("crate", self.crates))
        object.__setattr__(self, "targets", _distinct_cells("target", self.targets))
        if self.goal is not None:
            object.__setattr__(self, "goal", _cell(self.goal))
        if self.width < 1 or self.height < 1:
            raise ConfigurationError(f"map size must be positive, got {self.width}x{self.height}")

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.width and 0 <= cell[1] < self.height

    def is_free(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and cell not in self.obstacles

    def free_cells(self) -> List[Cell]:
        """Non-obstacle cells in x-major order (the state enumeration order)."""
        return [
            (x, y)
            for x in range(self.width)
            for y in range(self.height)
            if (x, y) not in self.obstacles
        ]

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "width": self.width,
            "height": self.height,
            "start": list(self.start),
            "obstacles": [list(c) for c in sorted(self.obstacles)],
        }
        if self.goal is not None:
            d["goal"] = list(self.goal)
        if self.crates:
            d["crates"] = [list(c) for c in sorted(self.crates)]
            d["targets"] = [list(c) for c in sorted(self.targets)]
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GridMap":
        if "width" not in d or "height" not in d:
            raise ConfigurationError("map needs 'width' and 'height'")
        goal = d.get("goal")
        return cls(
            width=int(d["width"]),
            height=int(d["height"]),
            start=_cell(d.get("start", (0, 0))),
            obstacles=_cells(d.get("obstacles")),
            goal=_cell(goal) if goal is not None else None,
            crates=d.get("crates") or (),
            targets=d.get("targets") or (),
        )


def load_map(path: Path | str) -> tuple[GridMap, Domain]:
    """
    Read a map descriptor from YAML. The file is either a bare map mapping or a run
    config with a top-level `map:` section; `domain:` selects the variant.
    """
    d = load_yaml(path) or {}
    m = d.get("map", d)
    return GridMap.from_dict(m), Domain.parse(m.get("domain", "gridworld"))
