from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple

from .backup import THETA, argmax_action, backup, check_discount
from .model import TransitionModel
from .tables import Policy, ValueTable
from .types import State

log = logging.getLogger("gridmdp.rl")


def value_iteration(
    model: TransitionModel,
    states: Sequence[State],
    policy: Policy,
    values: ValueTable,
    gamma: float = 0.9,
    theta: float = THETA,
    max_sweeps: Optional[int] = None,
) -> Dict[str, float]:
    """
    In-place (Gauss-Seidel) value iteration over a deterministic MDP.

    Each sweep visits the non-terminal states in `states` order and writes
    V(s) = max_a [r(s,a) + gamma * V(s')] straight back into `values`, so later states
    in the same sweep already see the new numbers. The argmax goes into `policy`.
    Sweeps repeat until the largest change is <= theta. There is no cap unless the
    caller passes `max_sweeps`; a diverging setup keeps sweeping.

    Returns info: {"sweeps": int, "residual": float}
    """
    check_discount(gamma)
    sweeps = 0
    while True:
        delta = 0.0
        for s in states:
            if model.is_end(s):
                continue
            best_a, best_v = argmax_action(model, s, lambda a: backup(model, values, s, a, gamma))
            if best_a is None:
                # boxed in, nothing to back up
                continue
            old = values.get(s)
            values.set(s, best_v)
            policy.update(s, best_a)
            delta = max(delta, abs(old - best_v))
        sweeps += 1
        log.debug("value iteration sweep %d: delta=%.6f", sweeps, delta)
        if delta <= theta:
            break
        if max_sweeps is not None and sweeps >= max_sweeps:
            log.warning("value iteration stopped at max_sweeps=%d (delta=%.6f)", max_sweeps, delta)
            break

    log.info("value iteration converged after %d sweeps (residual %.2e)", sweeps, delta)
    return {"sweeps": sweeps, "residual": delta}


def bellman_residual(
    model: TransitionModel, states: Sequence[State], values: ValueTable, gamma: float
) -> float:
    """max |V(s) - max_a [r + gamma V(s')]| over non-terminal states with a valid action."""
    worst = 0.0
    for s in states:
        if model.is_end(s):
            continue
        a, v = argmax_action(model, s, lambda a: backup(model, values, s, a, gamma))
        if a is not None:
            worst = max(worst, abs(values.get(s) - v))
    return worst


def simulate_policy(
    model: TransitionModel,
    policy: Policy,
    max_steps: int = 100,
    start: Optional[State] = None,
) -> Tuple[float, int, bool]:
    """
    Roll out a deterministic policy once from the start state.
    Returns (return, steps, reached_terminal).
    """
    s = model.start_state if start is None else start
    if model.is_end(s):
        return 0.0, 0, True
    G = 0.0
    for t in range(max_steps):
        s, r, done = model.step(s, policy.action(s))
        G += r
        if done:
            return G, t + 1, True
    return G, max_steps, False
