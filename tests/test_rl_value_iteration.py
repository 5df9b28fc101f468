import pytest

from gridmdp.rl.backup import THETA
from gridmdp.rl.maps import GridMap
from gridmdp.rl.session import Session
from gridmdp.rl.types import Action, GridState
from gridmdp.rl.value_iteration import bellman_residual, simulate_policy


def open_4x4():
    return GridMap(width=4, height=4, start=(0, 0), goal=(3, 3))


def test_value_iteration_open_grid_scenario():
    sess = Session(open_4x4(), "gridworld")
    info = sess.value_iteration(gamma=0.9)

    assert info["residual"] <= THETA
    assert sess.values.get(GridState(3, 3)) == 1.0
    assert sess.policy.action(GridState(3, 2)) == Action.UP
    assert sess.policy.action(GridState(2, 3)) == Action.RIGHT
    # six moves from the corner; the goal value reaches it discounted five times
    assert sess.values.get(GridState(0, 0)) == pytest.approx(0.9**5)


def test_value_iteration_policy_follows_shortest_paths():
    sess = Session(open_4x4(), "gridworld")
    sess.value_iteration(gamma=0.9)
    goal = (3, 3)
    for s in sess.states:
        if sess.model.is_end(s):
            continue
        ns = sess.model.next_state(s, sess.policy.action(s))
        d_now = abs(goal[0] - s.x) + abs(goal[1] - s.y)
        d_next = abs(goal[0] - ns.x) + abs(goal[1] - ns.y)
        assert d_next == d_now - 1


def test_value_iteration_satisfies_bellman_optimality():
    grid = GridMap(width=5, height=5, start=(0, 0), goal=(4, 4), obstacles=[(1, 1), (2, 2), (3, 3), (1, 3)])
    sess = Session(grid, "gridworld")
    sess.value_iteration(gamma=0.9)
    assert bellman_residual(sess.model, sess.states, sess.values, 0.9) <= THETA

    G, steps, ok = simulate_policy(sess.model, sess.policy, max_steps=50)
    assert ok, "Policy did not reach terminal"
    assert steps == 8
    assert G == 1.0


def test_value_iteration_respects_external_cap():
    sess = Session(open_4x4(), "gridworld")
    info = sess.value_iteration(gamma=0.9, max_sweeps=1)
    assert info["sweeps"] == 1


def test_value_iteration_solves_sokoban():
    grid = GridMap(width=5, height=3, start=(0, 1), crates=[(1, 1)], targets=[(3, 1)])
    sess = Session(grid, "sokoban")
    sess.value_iteration(gamma=0.9)
    assert bellman_residual(sess.model, sess.states, sess.values, 0.9) <= THETA
    G, steps, ok = sess.run_policy(max_steps=20)
    assert ok
    assert steps == 2


def test_value_iteration_two_crate_sokoban():
    grid = GridMap(
        width=4, height=4, start=(0, 0), crates=[(1, 1), (2, 2)], targets=[(1, 2), (2, 1)]
    )
    sess = Session(grid, "sokoban")
    assert len(sess.states) == 120 * 14
    sess.value_iteration(gamma=0.95)
    G, steps, ok = sess.run_policy(max_steps=40)
    assert ok
    assert G == pytest.approx(1.0)
