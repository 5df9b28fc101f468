from __future__ import annotations

from typing import Iterator, List

from .combinatorics import choose, count_choose
from .errors import ConfigurationError
from .model import TransitionModel
from .types import ACTIONS, Action, SokobanState, shift


class SokobanModel(TransitionModel):
    """
    Crate-pushing puzzle over a fixed map.

    State = (player cell, frozenset of crate cells). The player moves one cell; walking
    into a crate pushes it one cell further if that cell is inside the grid and holds
    neither an obstacle nor another crate. Blocked moves leave the state unchanged.

    Reward is shaped: the change in the fraction of crates sitting on targets.
    """

    def validate(self) -> None:
        m = self.map
        k = len(m.crates)
        if k == 0:
            raise ConfigurationError("Sokoban needs at least one crate")
        if len(m.targets) != k:
            raise ConfigurationError(
                f"Sokoban needs as many targets as crates, got {len(m.targets)} targets for {k} crates"
            )
        if not m.is_free(m.start):
            raise ConfigurationError(f"start {m.start} is off the grid or on an obstacle")
        if m.start in m.crates:
            raise ConfigurationError(f"start {m.start} is occupied by a crate")
        for c in m.crates:
            if not m.is_free(c):
                raise ConfigurationError(f"crate {c} is off the grid or on an obstacle")
        for t in m.targets:
            if not m.is_free(t):
                raise ConfigurationError(f"target {t} is off the grid or on an obstacle")

    @property
    def n_crates(self) -> int:
        return len(self.map.crates)

    def count_states(self) -> int:
        f, k = len(self.map.free_cells()), self.n_crates
        return count_choose(f, k) * (f - k)

    def iter_states(self) -> Iterator[SokobanState]:
        free = self.map.free_cells()
        for crates in choose(free, self.n_crates):
            for player in free:
                if player not in crates:
                    yield SokobanState(player, crates)

    @property
    def start_state(self) -> SokobanState:
        return SokobanState.of(self.map.start, self.map.crates)

    def on_target_fraction(self, state: SokobanState) -> float:
        return len(state.crates & self.map.targets) / self.n_crates

    def initial_value(self, state: SokobanState) -> float:
        return self.on_target_fraction(state)

    # ---------- dynamics ----------

    def next_state(self, state: SokobanState, action: Action) -> SokobanState:
        cell = shift(state.player, action)
        if not self.map.is_free(cell):
            return state
        if cell not in state.crates:
            return SokobanState(cell, state.crates)

        dest = shift(cell, action)
        if not self.map.is_free(dest) or dest in state.crates:
            return state
        return SokobanState(cell, (state.crates - {cell}) | {dest})

    def valid_actions(self, state: SokobanState) -> List[Action]:
        return [a for a in ACTIONS if self.next_state(state, a) != state]

    def immediate_reward(self, state: SokobanState, action: Action) -> float:
        ns = self.next_state(state, action)
        return self.on_target_fraction(ns) - self.on_target_fraction(state)

    def is_end(self, state: SokobanState) -> bool:
        return len(state.crates) == len(self.map.targets) and state.crates <= self.map.targets
