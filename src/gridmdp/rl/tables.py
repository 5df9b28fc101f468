from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Tuple

from .model import TransitionModel
from .types import ACTIONS, Action, State

log = logging.getLogger("gridmdp.rl")

DEFAULT_ACTION = ACTIONS[0]
DEFAULT_VALUE = 0.0


class Policy:
    """Total map state -> Action, mutated in place by the solvers."""

    def __init__(self, actions: Dict[State, Action] | None = None):
        self._actions: Dict[State, Action] = dict(actions or {})

    @classmethod
    def initial(cls, states: Iterable[State], model: TransitionModel) -> "Policy":
        # any valid action will do; first valid in enumeration order keeps it reproducible
        return cls({s: model.first_valid_action(s) for s in states})

    def action(self, state: State) -> Action:
        try:
            return self._actions[state]
        except KeyError:
            log.warning("policy has no entry for %r; falling back to %s", state, DEFAULT_ACTION.name)
            return DEFAULT_ACTION

    __getitem__ = action

    def update(self, state: State, action: Action) -> None:
        self._actions[state] = action

    def items(self) -> Iterator[Tuple[State, Action]]:
        return iter(self._actions.items())

    def __contains__(self, state: object) -> bool:
        return state in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Policy):
            return NotImplemented
        return self._actions == other._actions


class ValueTable:
    """Total map state -> float, mutated in place by the solvers."""

    def __init__(self, values: Dict[State, float] | None = None):
        self._values: Dict[State, float] = dict(values or {})

    @classmethod
    def initial(cls, states: Iterable[State], model: TransitionModel) -> "ValueTable":
        return cls({s: model.initial_value(s) for s in states})

    def get(self, state: State) -> float:
        try:
            return self._values[state]
        except KeyError:
            log.warning("value table has no entry for %r; reading %.1f", state, DEFAULT_VALUE)
            return DEFAULT_VALUE

    __getitem__ = get

    def set(self, state: State, value: float) -> None:
        self._values[state] = float(value)

    __setitem__ = set

    def items(self) -> Iterator[Tuple[State, float]]:
        return iter(self._values.items())

    def __contains__(self, state: object) -> bool:
        return state in self._values

    def __len__(self) -> int:
        return len(self._values)
