from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import FrozenSet, Iterable, NamedTuple, Tuple, Union

Cell = Tuple[int, int]  # (x, y), x to the right, y upwards


class Action(IntEnum):
    """Moves in fixed enumeration order; the order doubles as the tie-break everywhere."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


ACTIONS: Tuple[Action, ...] = tuple(Action)

DELTAS = {
    Action.UP: (0, 1),
    Action.RIGHT: (1, 0),
    Action.DOWN: (0, -1),
    Action.LEFT: (-1, 0),
}

ARROWS = {Action.UP: "^", Action.RIGHT: ">", Action.DOWN: "v", Action.LEFT: "<"}


def shift(cell: Cell, action: Action) -> Cell:
    dx, dy = DELTAS[action]
    return cell[0] + dx, cell[1] + dy


@dataclass(frozen=True, order=True)
class GridState:
    x: int
    y: int

    @property
    def cell(self) -> Cell:
        return self.x, self.y

    def __repr__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass(frozen=True)
class SokobanState:
    """
    Player cell plus the crate configuration.

    Crates are held in a frozenset, so two states with the same player and the same
    crate cells compare and hash equal regardless of the order crates were listed in.
    """

    player: Cell
    crates: FrozenSet[Cell]

    @classmethod
    def of(cls, player: Cell, crates: Iterable[Cell]) -> "SokobanState":
        return cls(tuple(player), frozenset(tuple(c) for c in crates))

    def __repr__(self) -> str:
        return f"P{self.player} C{sorted(self.crates)}"


State = Union[GridState, SokobanState]


class StateAction(NamedTuple):
    """Composite Q-table key."""

    state: State
    action: Action
