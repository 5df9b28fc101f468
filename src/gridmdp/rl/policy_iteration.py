from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from .backup import THETA, argmax_action, backup, check_discount
from .model import TransitionModel
from .tables import Policy, ValueTable
from .types import State

log = logging.getLogger("gridmdp.rl")


def policy_evaluation(
    model: TransitionModel,
    states: Sequence[State],
    policy: Policy,
    values: ValueTable,
    gamma: float = 0.9,
    theta: float = THETA,
    max_sweeps: Optional[int] = None,
) -> Dict[str, float]:
    """
    Iterative evaluation of a fixed deterministic policy, swept in place:
    V(s) <- r(s, pi(s)) + gamma * V(s'), reward dropped when s' is terminal.

    Returns info: {"sweeps": int, "residual": float}
    """
    check_discount(gamma)
    sweeps = 0
    while True:
        delta = 0.0
        for s in states:
            if model.is_end(s):
                continue
            old = values.get(s)
            new = backup(model, values, s, policy.action(s), gamma)
            values.set(s, new)
            delta = max(delta, abs(old - new))
        sweeps += 1
        log.debug("policy evaluation sweep %d: delta=%.6f", sweeps, delta)
        if delta <= theta:
            break
        if max_sweeps is not None and sweeps >= max_sweeps:
            log.warning("policy evaluation stopped at max_sweeps=%d (delta=%.6f)", max_sweeps, delta)
            break
    return {"sweeps": sweeps, "residual": delta}


def policy_improvement(
    model: TransitionModel,
    states: Sequence[State],
    policy: Policy,
    values: ValueTable,
    gamma: float = 0.9,
    tol: float = THETA,
) -> bool:
    """
    One greedy sweep scored with the same backup evaluation uses:
    pi(s) = argmax_a [r(s, a) + gamma * V(s')], reward dropped when s' is terminal.

    A state keeps its action unless the argmax beats it by more than `tol`, so
    near-ties left by a truncated evaluation do not flip back and forth.
    Returns True if any state's action changed (False means the policy is stable).
    """
    check_discount(gamma)
    changed = 0
    for s in states:
        if model.is_end(s):
            continue
        best_a, best_v = argmax_action(model, s, lambda a: backup(model, values, s, a, gamma))
        if best_a is None:
            continue
        current = policy.action(s)
        if best_a != current and best_v > backup(model, values, s, current, gamma) + tol:
            policy.update(s, best_a)
            changed += 1
    log.debug("policy improvement: %d states changed action", changed)
    return changed > 0


def policy_iteration(
    model: TransitionModel,
    states: Sequence[State],
    policy: Policy,
    values: ValueTable,
    gamma: float = 0.9,
    theta: float = THETA,
    max_rounds: Optional[int] = None,
) -> Dict[str, float]:
    """
    Alternate evaluation and improvement until improvement leaves every action as is.
    `max_rounds` is an optional external cap; by default there is none.

    Returns info: {"rounds": int, "sweeps": int, "residual": float}
    """
    rounds, sweeps = 0, 0
    while True:
        info = policy_evaluation(model, states, policy, values, gamma=gamma, theta=theta)
        sweeps += info["sweeps"]
        rounds += 1
        if not policy_improvement(model, states, policy, values, gamma=gamma, tol=theta):
            break
        if max_rounds is not None and rounds >= max_rounds:
            log.warning("policy iteration stopped at max_rounds=%d", max_rounds)
            break

    log.info("policy iteration stable after %d rounds (%d evaluation sweeps)", rounds, sweeps)
    return {"rounds": rounds, "sweeps": sweeps, "residual": info["residual"]}
