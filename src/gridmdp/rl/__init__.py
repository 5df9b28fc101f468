# Tabular MDP engine: domains, tables and solvers. Explicit re-exports.

from .errors import (
    ConfigurationError as ConfigurationError,
    GridMDPError as GridMDPError,
    StateSpaceError as StateSpaceError,
)
from .gridworld import GridWorldModel as GridWorldModel
from .maps import Domain as Domain, GridMap as GridMap, load_map as load_map
from .model import TransitionModel as TransitionModel
from .monte_carlo import monte_carlo_control as monte_carlo_control
from .policy_iteration import (
    policy_evaluation as policy_evaluation,
    policy_improvement as policy_improvement,
    policy_iteration as policy_iteration,
)
from .q_learning import q_learning as q_learning
from .session import Session as Session, SetupResult as SetupResult, setup as setup
from .sokoban import SokobanModel as SokobanModel
from .tables import Policy as Policy, ValueTable as ValueTable
from .types import (
    ACTIONS as ACTIONS,
    Action as Action,
    GridState as GridState,
    SokobanState as SokobanState,
    StateAction as StateAction,
)
from .value_iteration import simulate_policy as simulate_policy, value_iteration as value_iteration

__all__ = [
    "ACTIONS",
    "Action",
    "ConfigurationError",
    "Domain",
    "GridMDPError",
    "GridMap",
    "GridState",
    "GridWorldModel",
    "Policy",
    "Session",
    "SetupResult",
    "SokobanModel",
    "SokobanState",
    "StateAction",
    "StateSpaceError",
    "TransitionModel",
    "ValueTable",
    "load_map",
    "monte_carlo_control",
    "policy_evaluation",
    "policy_improvement",
    "policy_iteration",
    "q_learning",
    "setup",
    "simulate_policy",
    "value_iteration",
]
