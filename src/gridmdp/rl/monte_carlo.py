from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .backup import argmax_action, check_discount, check_positive, check_probability, successor
from .model import TransitionModel
from .tables import Policy, ValueTable
from .types import Action, State

log = logging.getLogger("gridmdp.rl")

SUCCESS_REWARD = 1.0  # synthetic last transition when the episode reaches a terminal state
FAILURE_REWARD = -1.0  # synthetic last transition when the step limit runs out

# (state, action taken or None for the synthetic closing entry, reward)
Step = Tuple[State, Optional[Action], float]


def epsilon_greedy(
    model: TransitionModel, state: State, policy: Policy, epsilon: float, rng: np.random.Generator
) -> Action:
    """Uniform over the valid actions with probability epsilon, else the policy's action."""
    if rng.random() < epsilon:
        acts = model.valid_actions(state)
        if acts:
            return acts[int(rng.integers(0, len(acts)))]
    return policy.action(state)


def generate_episode(
    model: TransitionModel,
    policy: Policy,
    values: ValueTable,
    epsilon: float,
    max_steps: int,
    rng: np.random.Generator,
) -> Tuple[List[Step], bool]:
    """
    Roll out from the fixed start state. Returns (steps, reached_terminal).

    The last entry is always synthetic: +1 on the terminal state, or -1 on the state
    where the step budget ran out. Real rewards for entering a terminal are dropped
    so the +1 is not counted twice.
    """
    s = model.start_state
    episode: List[Step] = []
    while True:
        if model.is_end(s):
            episode.append((s, None, SUCCESS_REWARD))
            return episode, True
        if len(episode) >= max_steps:
            episode.append((s, None, FAILURE_REWARD))
            return episode, False
        a = epsilon_greedy(model, s, policy, epsilon, rng)
        ns = successor(model, values, s, a)
        r = 0.0 if model.is_end(ns) else model.immediate_reward(s, a)
        episode.append((s, a, r))
        s = ns


def monte_carlo_control(
    model: TransitionModel,
    states: Sequence[State],
    policy: Policy,
    values: ValueTable,
    episodes: int = 500,
    gamma: float = 0.9,
    max_steps: int = 100,
    epsilon: float = 0.1,
    first_visit: bool = True,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[Dict[State, float], Dict[str, float]]:
    """
    On-policy Monte Carlo control with epsilon-greedy rollouts.

    After every episode the per-state averaged returns are refreshed, written into
    `values` and used for a one-step greedy update of the policy on every
    non-terminal state (unvisited successors count as 0).

    Returns (averaged_returns, info) where info = {"episodes", "successes", "mean_length"}.
    """
    check_positive("episodes", episodes)
    check_positive("max_steps", max_steps)
    check_discount(gamma)
    check_probability("epsilon", epsilon)
    rng = rng if rng is not None else np.random.default_rng(0)

    sums: Dict[State, float] = defaultdict(float)
    counts: Dict[State, int] = defaultdict(int)
    averages: Dict[State, float] = {}
    successes, total_len = 0, 0

    for ep in range(episodes):
        episode, ok = generate_episode(model, policy, values, epsilon, max_steps, rng)
        successes += int(ok)
        total_len += len(episode) - 1

        first_seen: Dict[State, int] = {}
        for t, (s, _, _) in enumerate(episode):
            first_seen.setdefault(s, t)

        G = 0.0
        for t in range(len(episode) - 1, -1, -1):
            s, _, r = episode[t]
            G = gamma * G + r
            if first_visit and first_seen[s] != t:
                continue
            sums[s] += G
            counts[s] += 1

        for s in counts:
            averages[s] = sums[s] / counts[s]
            values.set(s, averages[s])

        for s in states:
            if model.is_end(s):
                continue
            best_a, _ = argmax_action(
                model, s, lambda a: averages.get(successor(model, values, s, a), 0.0)
            )
            if best_a is not None:
                policy.update(s, best_a)

        log.debug("monte carlo episode %d: len=%d reached=%s", ep + 1, len(episode) - 1, ok)

    info = {
        "episodes": episodes,
        "successes": successes,
        "mean_length": total_len / episodes,
    }
    log.info(
        "monte carlo (%s-visit): %d/%d episodes reached a terminal state",
        "first" if first_visit else "every",
        successes,
        episodes,
    )
    return averages, info
