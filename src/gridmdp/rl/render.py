from __future__ import annotations

from typing import Callable, FrozenSet, Optional

from .maps import GridMap
from .model import TransitionModel
from .sokoban import SokobanModel
from .tables import Policy, ValueTable
from .types import ARROWS, Cell, GridState, SokobanState, State

# Plain-text stand-in for the display adapter; rows are printed top (y = height-1) first.


def _grid(m: GridMap, cell_str: Callable[[Cell], str]) -> str:
    rows = []
    for y in range(m.height - 1, -1, -1):
        rows.append(" ".join(cell_str((x, y)) for x in range(m.width)))
    return "\n".join(rows)


def _state_at(model: TransitionModel, cell: Cell, crates: Optional[FrozenSet[Cell]]) -> State:
    if isinstance(model, SokobanModel):
        return SokobanState(cell, crates if crates is not None else model.map.crates)
    return GridState(*cell)


def render_state(model: TransitionModel, state: State) -> str:
    """
    Legend: # obstacle, @ player, G goal (grid world), $ crate, . target,
    * crate on target, + player on target.
    """
    m = model.map

    def cell_str(c: Cell) -> str:
        if c in m.obstacles:
            return "#"
        if isinstance(state, SokobanState):
            on_target = c in m.targets
            if c == state.player:
                return "+" if on_target else "@"
            if c in state.crates:
                return "*" if on_target else "$"
            return "." if on_target else "_"
        if c == state.cell:
            return "@"
        return "G" if c == m.goal else "_"

    return _grid(m, cell_str)


def render_policy(
    model: TransitionModel, policy: Policy, crates: Optional[FrozenSet[Cell]] = None
) -> str:
    """
    Arrow per free cell. For Sokoban the arrows are the player's moves with the
    crates held at `crates` (the start configuration by default).
    """
    m = model.map

    def cell_str(c: Cell) -> str:
        if c in m.obstacles:
            return "#"
        s = _state_at(model, c, crates)
        if isinstance(s, SokobanState) and c in s.crates:
            return "$"
        if model.is_end(s):
            return "G"
        if s not in policy:
            return "?"
        return ARROWS[policy.action(s)]

    return _grid(m, cell_str)


def render_values(
    model: TransitionModel, values: ValueTable, crates: Optional[FrozenSet[Cell]] = None
) -> str:
    m = model.map

    def cell_str(c: Cell) -> str:
        if c in m.obstacles:
            return "   #  "
        s = _state_at(model, c, crates)
        if s not in values:
            return "   -  "
        return f"{values.get(s):6.2f}"

    return _grid(m, cell_str)
