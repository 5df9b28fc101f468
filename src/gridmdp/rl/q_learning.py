from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .backup import check_discount, check_positive, check_probability, successor
from .model import TransitionModel
from .tables import Policy, ValueTable
from .types import ACTIONS, Action, State, StateAction

log = logging.getLogger("gridmdp.rl")

QTable = Dict[StateAction, float]


def _candidates(model: TransitionModel, state: State) -> List[Action]:
    return model.valid_actions(state) or list(ACTIONS)


def greedy_action(Q: QTable, model: TransitionModel, state: State) -> Tuple[Action, float]:
    """argmax_a Q(s, a) over valid actions; the first maximum in action order wins."""
    acts = _candidates(model, state)
    best_a, best_q = acts[0], Q[StateAction(state, acts[0])]
    for a in acts[1:]:
        q = Q[StateAction(state, a)]
        if q > best_q:
            best_a, best_q = a, q
    return best_a, best_q


def greedy_policy_from_q(
    Q: QTable, model: TransitionModel, states: Sequence[State], policy: Policy, values: ValueTable
) -> None:
    for s in states:
        a, q = greedy_action(Q, model, s)
        policy.update(s, a)
        if not model.is_end(s):
            values.set(s, q)


def q_learning(
    model: TransitionModel,
    states: Sequence[State],
    policy: Policy,
    values: ValueTable,
    episodes: int = 500,
    alpha: float = 0.5,
    gamma: float = 0.9,
    epsilon: float = 0.1,
    max_steps: int = 100,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[QTable, Dict[str, float]]:
    """
    Tabular Q-learning with epsilon-greedy exploration from the fixed start state.

    Q(s,a) <- Q(s,a) + alpha * (r + gamma * max_a' Q(s',a') - Q(s,a))

    Terminal states are never updated, so their Q stays 0. When learning ends the
    greedy policy goes into `policy` and max_a Q(s,a) into `values` (non-terminal).
    Returns (Q, info) where info = {"episodes", "successes", "mean_length"}.
    """
    check_positive("episodes", episodes)
    check_positive("max_steps", max_steps)
    check_discount(gamma)
    check_probability("alpha", alpha)
    check_probability("epsilon", epsilon)
    rng = rng if rng is not None else np.random.default_rng(0)

    Q: QTable = {StateAction(s, a): 0.0 for s in states for a in ACTIONS}
    successes, total_len = 0, 0

    for ep in range(episodes):
        s = model.start_state
        steps = 0
        while steps < max_steps and not model.is_end(s):
            if rng.random() < epsilon:
                acts = _candidates(model, s)
                a = acts[int(rng.integers(0, len(acts)))]
            else:
                a, _ = greedy_action(Q, model, s)
            ns = successor(model, values, s, a)
            r = model.immediate_reward(s, a)
            _, best_next = greedy_action(Q, model, ns)
            key = StateAction(s, a)
            Q[key] += alpha * (r + gamma * best_next - Q[key])
            s = ns
            steps += 1
        successes += int(model.is_end(s))
        total_len += steps
        log.debug("q-learning episode %d: steps=%d reached=%s", ep + 1, steps, model.is_end(s))

    greedy_policy_from_q(Q, model, states, policy, values)
    info = {"episodes": episodes, "successes": successes, "mean_length": total_len / episodes}
    log.info("q-learning: %d/%d episodes reached a terminal state", successes, episodes)
    return Q, info
