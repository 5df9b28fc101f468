from __future__ import annotations

import math
from typing import Callable, Optional, Tuple

from .errors import ConfigurationError, StateSpaceError
from .model import TransitionModel
from .tables import ValueTable
from .types import Action, State

THETA = 1e-3  # convergence threshold on the max value change per sweep


def successor(model: TransitionModel, values: ValueTable, state: State, action: Action) -> State:
    """next_state, checked against the enumerated universe (the value table's keys)."""
    ns = model.next_state(state, action)
    if ns not in values:
        raise StateSpaceError(state, action, ns)
    return ns


def backup(
    model: TransitionModel, values: ValueTable, state: State, action: Action, gamma: float
) -> float:
    """
    One-step Bellman backup r + gamma * V(s').

    The reward for entering a terminal state is dropped: the terminal's own value
    already carries it, so counting both would double it.
    """
    ns = successor(model, values, state, action)
    r = 0.0 if model.is_end(ns) else model.immediate_reward(state, action)
    return r + gamma * values.get(ns)


def argmax_action(
    model: TransitionModel, state: State, score: Callable[[Action], float]
) -> Tuple[Optional[Action], float]:
    """
    Best valid action under `score`. Strict > so the first maximum in action order wins.
    Returns (None, -inf) when the state has no valid action.
    """
    best_a: Optional[Action] = None
    best_v = -math.inf
    for a in model.valid_actions(state):
        v = score(a)
        if v > best_v:
            best_a, best_v = a, v
    return best_a, best_v


def check_discount(gamma: float) -> None:
    if not 0.0 <= gamma <= 1.0:
        raise ConfigurationError(f"discount must be in [0, 1], got {gamma}")


def check_probability(name: str, p: float) -> None:
    if not 0.0 <= p <= 1.0:
        raise ConfigurationError(f"{name} must be in [0, 1], got {p}")


def check_positive(name: str, n: int) -> None:
    if n < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {n}")
