import logging

import numpy as np
import pytest

from gridmdp.rl.errors import ConfigurationError, StateSpaceError
from gridmdp.rl.gridworld import GridWorldModel
from gridmdp.rl.maps import Domain, GridMap
from gridmdp.rl.session import Session, setup
from gridmdp.rl.tables import Policy, ValueTable
from gridmdp.rl.types import Action, GridState, SokobanState
from gridmdp.rl.value_iteration import value_iteration


def test_setup_builds_initial_tables():
    res = setup(GridMap(width=4, height=4, start=(0, 0), goal=(3, 3), obstacles=[(1, 1)]), "gridworld")
    assert len(res.states) == len(res.policy) == len(res.values) == 15
    assert res.values.get(GridState(3, 3)) == 1.0
    assert res.values.get(GridState(0, 0)) == 0.0
    assert res.policy.action(GridState(0, 3)) == Action.RIGHT  # UP is off the grid
    assert isinstance(res.model, GridWorldModel)


def test_setup_sokoban_uses_heuristic_values():
    grid = GridMap(width=4, height=3, start=(0, 0), crates=[(1, 1), (2, 1)], targets=[(2, 1), (3, 2)])
    res = setup(grid, Domain.SOKOBAN)
    assert res.values.get(res.model.start_state) == pytest.approx(0.5)
    assert res.values.get(SokobanState.of((0, 0), [(2, 1), (3, 2)])) == 1.0


def test_setup_rejects_oversized_state_space():
    grid = GridMap(width=6, height=6, start=(0, 0), crates=[(1, 1), (2, 2), (3, 3)],
                   targets=[(4, 4), (4, 1), (1, 4)])
    with pytest.raises(ConfigurationError, match="max_states"):
        setup(grid, "sokoban", max_states=10_000)


def test_unknown_domain():
    with pytest.raises(ConfigurationError):
        setup(GridMap(width=2, height=2, goal=(1, 1)), "tetris")
    assert Domain.parse("grid_world") is Domain.GRID_WORLD


def test_callbacks_fire_after_setup_and_solvers():
    events = []
    sess = Session(
        GridMap(width=3, height=3, start=(0, 0), goal=(2, 2)),
        "gridworld",
        rng=np.random.default_rng(0),
        on_update=lambda event, s: events.append((event, s)),
    )
    sess.value_iteration()
    sess.policy_iteration()
    sess.monte_carlo(episodes=5)
    sess.q_learning(episodes=5)
    assert [e for e, _ in events] == ["setup", "value_iteration", "policy_iteration", "monte_carlo", "q_learning"]
    assert all(s is sess for _, s in events)


def test_step_advances_under_current_policy():
    sess = Session(GridMap(width=3, height=3, start=(0, 0), goal=(2, 2)), "gridworld")
    sess.value_iteration()
    path = [sess.reset()]
    done = False
    while not done:
        state, _, done = sess.step()
        path.append(state)
    assert path[-1] == GridState(2, 2)
    assert len(path) == 5
    # stepping at the goal stays put
    assert sess.step() == (GridState(2, 2), 0.0, True)


class LeakyModel(GridWorldModel):
    """Drops a cell from the enumeration while still moving into it."""

    def iter_states(self):
        for s in super().iter_states():
            if s != GridState(1, 0):
                yield s


def test_transition_outside_universe_is_fatal():
    model = LeakyModel(GridMap(width=3, height=1, start=(0, 0), goal=(2, 0)))
    states = model.states()
    policy, values = Policy.initial(states, model), ValueTable.initial(states, model)
    with pytest.raises(StateSpaceError) as exc:
        value_iteration(model, states, policy, values)
    assert exc.value.next_state == GridState(1, 0)


def test_missing_entries_fall_back_with_warning(caplog):
    policy, values = Policy(), ValueTable()
    with caplog.at_level(logging.WARNING, logger="gridmdp.rl"):
        assert values.get(GridState(9, 9)) == 0.0
        assert policy.action(GridState(9, 9)) == Action.UP
    assert len(caplog.records) == 2
    assert all(r.levelno == logging.WARNING for r in caplog.records)
