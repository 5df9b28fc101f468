from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .errors import ConfigurationError
from .gridworld import GridWorldModel
from .maps import Domain, GridMap
from .model import TransitionModel
from .monte_carlo import monte_carlo_control
from .policy_iteration import policy_evaluation, policy_improvement, policy_iteration
from .q_learning import QTable, q_learning
from .sokoban import SokobanModel
from .tables import Policy, ValueTable
from .types import State
from .value_iteration import simulate_policy, value_iteration

log = logging.getLogger("gridmdp.rl")

DEFAULT_MAX_STATES = 1_000_000

MODELS = {
    Domain.GRID_WORLD: GridWorldModel,
    Domain.SOKOBAN: SokobanModel,
}

UpdateCallback = Callable[[str, "Session"], None]


@dataclass
class SetupResult:
    model: TransitionModel
    states: List[State]
    policy: Policy
    values: ValueTable


def build_model(grid_map: GridMap, domain: Domain | str) -> TransitionModel:
    return MODELS[Domain.parse(domain)](grid_map)


def setup(
    grid_map: GridMap,
    domain: Domain | str,
    max_states: Optional[int] = DEFAULT_MAX_STATES,
) -> SetupResult:
    """
    Validate the map, enumerate the state universe and build the initial tables.

    Raises ConfigurationError for a map the domain cannot use, or when the state
    space would exceed `max_states` (checked before any state is generated).
    """
    model = build_model(grid_map, domain)
    n = model.count_states()
    if max_states is not None and n > max_states:
        raise ConfigurationError(
            f"{type(model).__name__} would enumerate {n} states, above max_states={max_states}; "
            "use a smaller map or fewer crates"
        )
    states = model.states()
    policy = Policy.initial(states, model)
    values = ValueTable.initial(states, model)
    log.info("%s: %d states generated", type(model).__name__, len(states))
    return SetupResult(model=model, states=states, policy=policy, values=values)


class Session:
    """
    One engine run over one map: the state universe, the shared policy/value tables,
    the random source and a cursor for step-by-step playback.

    Solvers run one at a time and mutate `policy` / `values` in place. `on_update` is
    called as on_update(event, session) after setup and after each solver, so a
    renderer can redraw. Build a new Session to start over.
    """

    def __init__(
        self,
        grid_map: GridMap,
        domain: Domain | str = Domain.GRID_WORLD,
        rng: Optional[np.random.Generator] = None,
        on_update: Optional[UpdateCallback] = None,
        max_states: Optional[int] = DEFAULT_MAX_STATES,
    ):
        self.map = grid_map
        self.domain = Domain.parse(domain)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.on_update = on_update

        res = setup(grid_map, self.domain, max_states=max_states)
        self.model = res.model
        self.states = res.states
        self.policy = res.policy
        self.values = res.values
        self.returns: Dict[State, float] = {}
        self.q_table: QTable = {}
        self.current_state: State = self.model.start_state
        self._notify("setup")

    def _notify(self, event: str) -> None:
        if self.on_update is not None:
            self.on_update(event, self)

    # ---------- solvers ----------

    def value_iteration(self, gamma: float = 0.9, max_sweeps: Optional[int] = None) -> Dict[str, float]:
        info = value_iteration(
            self.model, self.states, self.policy, self.values, gamma=gamma, max_sweeps=max_sweeps
        )
        self._notify("value_iteration")
        return info

    def policy_evaluation(self, gamma: float = 0.9) -> Dict[str, float]:
        info = policy_evaluation(self.model, self.states, self.policy, self.values, gamma=gamma)
        self._notify("policy_evaluation")
        return info

    def policy_improvement(self, gamma: float = 0.9) -> bool:
        changed = policy_improvement(self.model, self.states, self.policy, self.values, gamma=gamma)
        self._notify("policy_improvement")
        return changed

    def policy_iteration(self, gamma: float = 0.9, max_rounds: Optional[int] = None) -> Dict[str, float]:
        info = policy_iteration(
            self.model, self.states, self.policy, self.values, gamma=gamma, max_rounds=max_rounds
        )
        self._notify("policy_iteration")
        return info

    def monte_carlo(
        self,
        episodes: int = 500,
        gamma: float = 0.9,
        max_steps: int = 100,
        epsilon: float = 0.1,
        first_visit: bool = True,
    ) -> Dict[str, float]:
        self.returns, info = monte_carlo_control(
            self.model,
            self.states,
            self.policy,
            self.values,
            episodes=episodes,
            gamma=gamma,
            max_steps=max_steps,
            epsilon=epsilon,
            first_visit=first_visit,
            rng=self.rng,
        )
        self._notify("monte_carlo")
        return info

    def q_learning(
        self,
        episodes: int = 500,
        alpha: float = 0.5,
        gamma: float = 0.9,
        epsilon: float = 0.1,
        max_steps: int = 100,
    ) -> Dict[str, float]:
        self.q_table, info = q_learning(
            self.model,
            self.states,
            self.policy,
            self.values,
            episodes=episodes,
            alpha=alpha,
            gamma=gamma,
            epsilon=epsilon,
            max_steps=max_steps,
            rng=self.rng,
        )
        self._notify("q_learning")
        return info

    # ---------- playback ----------

    def reset(self) -> State:
        self.current_state = self.model.start_state
        return self.current_state

    def step(self) -> Tuple[State, float, bool]:
        """Advance the cursor one step under the current policy. Returns (state, reward, done)."""
        if self.model.is_end(self.current_state):
            return self.current_state, 0.0, True
        ns, r, done = self.model.step(self.current_state, self.policy.action(self.current_state))
        self.current_state = ns
        self._notify("step")
        return ns, r, done

    def run_policy(self, max_steps: int = 100) -> Tuple[float, int, bool]:
        """Roll out the current policy from the start. Returns (return, steps, reached_terminal)."""
        return simulate_policy(self.model, self.policy, max_steps=max_steps)
