from __future__ import annotations

from typing import Iterator, List

from .errors import ConfigurationError
from .model import TransitionModel
from .types import ACTIONS, Action, GridState, shift


class GridWorldModel(TransitionModel):
    """
    Small deterministic GridWorld for tabular planning.

    - Coordinates: (x, y), actions move one cell (UP is y+1, RIGHT is x+1)
    - Obstacles and the border are impassable: a move into either is a no-op (no clamping)
    - Reward: +1 for the transition that enters the goal, 0 otherwise
    - Terminal: the goal cell
    - Initial values: 1.0 at the goal, 0 elsewhere
    """

    def validate(self) -> None:
        m = self.map
        if m.goal is None:
            raise ConfigurationError("grid world needs a goal cell")
        for name, cell in (("start", m.start), ("goal", m.goal)):
            if not m.in_bounds(cell):
                raise ConfigurationError(f"{name} {cell} is outside the {m.width}x{m.height} grid")
            if cell in m.obstacles:
                raise ConfigurationError(f"{name} {cell} cannot be an obstacle")

    def count_states(self) -> int:
        return len(self.map.free_cells())

    def iter_states(self) -> Iterator[GridState]:
        for x, y in self.map.free_cells():
            yield GridState(x, y)

    @property
    def start_state(self) -> GridState:
        return GridState(*self.map.start)

    @property
    def goal_state(self) -> GridState:
        return GridState(*self.map.goal)

    def initial_value(self, state: GridState) -> float:
        return 1.0 if state == self.goal_state else 0.0

    # ---------- dynamics ----------

    def next_state(self, state: GridState, action: Action) -> GridState:
        cell = shift(state.cell, action)
        if not self.map.is_free(cell):
            return state
        return GridState(*cell)

    def valid_actions(self, state: GridState) -> List[Action]:
        return [a for a in ACTIONS if self.map.is_free(shift(state.cell, a))]

    def immediate_reward(self, state: GridState, action: Action) -> float:
        return 1.0 if self.next_state(state, action) == self.goal_state else 0.0

    def is_end(self, state: GridState) -> bool:
        return state == self.goal_state
