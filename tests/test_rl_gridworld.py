import pytest

from gridmdp.rl.errors import ConfigurationError
from gridmdp.rl.gridworld import GridWorldModel
from gridmdp.rl.maps import GridMap
from gridmdp.rl.types import ACTIONS, Action, GridState


def make_model(**kw):
    params = dict(width=4, height=4, start=(0, 0), goal=(3, 3), obstacles=[(1, 1)])
    params.update(kw)
    return GridWorldModel(GridMap(**params))


def test_states_skip_obstacles_in_x_major_order():
    model = make_model()
    states = model.states()
    assert len(states) == 15 == model.count_states()
    assert GridState(1, 1) not in states
    assert states[:4] == [GridState(0, 0), GridState(0, 1), GridState(0, 2), GridState(0, 3)]


def test_moves_use_cartesian_directions():
    model = make_model()
    s = GridState(2, 2)
    assert model.next_state(s, Action.UP) == GridState(2, 3)
    assert model.next_state(s, Action.RIGHT) == GridState(3, 2)
    assert model.next_state(s, Action.DOWN) == GridState(2, 1)
    assert model.next_state(s, Action.LEFT) == GridState(1, 2)


def test_blocked_moves_are_no_ops():
    model = make_model()
    # border, no clamping: the state is returned unchanged
    assert model.next_state(GridState(3, 0), Action.RIGHT) == GridState(3, 0)
    assert model.next_state(GridState(0, 0), Action.DOWN) == GridState(0, 0)
    # obstacle
    assert model.next_state(GridState(0, 1), Action.RIGHT) == GridState(0, 1)


def test_valid_actions_match_transitions():
    model = make_model()
    for s in model.states():
        valid = model.valid_actions(s)
        for a in ACTIONS:
            assert (a in valid) == (model.next_state(s, a) != s)
    assert model.valid_actions(GridState(0, 0)) == [Action.UP, Action.RIGHT]


def test_reward_and_terminal():
    model = make_model()
    assert model.immediate_reward(GridState(3, 2), Action.UP) == 1.0
    assert model.immediate_reward(GridState(3, 2), Action.LEFT) == 0.0
    assert model.is_end(GridState(3, 3))
    assert not model.is_end(GridState(3, 2))
    ns, r, done = model.step(GridState(2, 3), Action.RIGHT)
    assert (ns, r, done) == (GridState(3, 3), 1.0, True)


def test_initial_values():
    model = make_model()
    assert model.initial_value(GridState(3, 3)) == 1.0
    assert model.initial_value(GridState(0, 0)) == 0.0


@pytest.mark.parametrize(
    "kw",
    [
        dict(goal=None),
        dict(goal=(1, 1)),
        dict(start=(1, 1)),
        dict(goal=(4, 0)),
        dict(start=(-1, 0)),
    ],
)
def test_bad_maps_fail_fast(kw):
    with pytest.raises(ConfigurationError):
        make_model(**kw)
