from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from .maps import GridMap
from .types import ACTIONS, Action, State


class TransitionModel(ABC):
    """
    Deterministic transition/reward model for one domain.

    A subclass is picked once at setup; solvers only talk to this interface, never to
    the domain tag. Every method is a pure function of its arguments and the map.
    """

    def __init__(self, grid_map: GridMap):
        self.map = grid_map
        self.validate()

    # ---------- setup ----------

    @abstractmethod
    def validate(self) -> None:
        """Raise ConfigurationError when the map is unusable for this domain."""

    @abstractmethod
    def count_states(self) -> int:
        """Size of the state space, computed without enumerating it."""

    @abstractmethod
    def iter_states(self) -> Iterator[State]:
        """Enumerate the state universe in its fixed order."""

    def states(self) -> List[State]:
        return list(self.iter_states())

    @property
    @abstractmethod
    def start_state(self) -> State: ...

    @abstractmethod
    def initial_value(self, state: State) -> float: ...

    # ---------- dynamics ----------

    @abstractmethod
    def next_state(self, state: State, action: Action) -> State: ...

    @abstractmethod
    def valid_actions(self, state: State) -> List[Action]: ...

    @abstractmethod
    def immediate_reward(self, state: State, action: Action) -> float: ...

    @abstractmethod
    def is_end(self, state: State) -> bool: ...

    def step(self, state: State, action: Action) -> Tuple[State, float, bool]:
        """Returns (s_next, reward, done)."""
        ns = self.next_state(state, action)
        return ns, self.immediate_reward(state, action), self.is_end(ns)

    def first_valid_action(self, state: State) -> Action:
        acts = self.valid_actions(state)
        return acts[0] if acts else ACTIONS[0]
