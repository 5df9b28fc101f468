from __future__ import annotations


class GridMDPError(Exception):
    """Base class for engine errors."""


class ConfigurationError(GridMDPError, ValueError):
    """The map or the hyperparameters cannot be used with the selected domain."""


class StateSpaceError(GridMDPError, RuntimeError):
    """A transition left the enumerated state universe (generator and model disagree)."""

    def __init__(self, state, action, next_state):
        self.state = state
        self.action = action
        self.next_state = next_state
        super().__init__(
            f"transition {state!r} --{getattr(action, 'name', action)}--> {next_state!r} "
            "produced a state outside the generated state space"
        )
