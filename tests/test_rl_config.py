from pathlib import Path

import yaml

from gridmdp.rl.config import load_run_config
from gridmdp.rl.maps import Domain, GridMap, load_map
from gridmdp.rl.render import render_policy, render_state, render_values
from gridmdp.rl.session import Session
from gridmdp.rl.types import GridState

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs" / "rl"


def test_load_run_config(tmp_path: Path):
    p = tmp_path / "run.yaml"
    p.write_text(yaml.safe_dump({
        "map": {
            "domain": "sokoban",
            "width": 5,
            "height": 3,
            "start": [1, 1],
            "crates": [[2, 1]],
            "targets": [[3, 1]],
        },
        "solver": {"gamma": 0.8, "episodes": 10, "seed": None},
    }))
    cfg = load_run_config(p)
    assert cfg.domain is Domain.SOKOBAN
    assert cfg.map.crates == frozenset({(2, 1)})
    assert cfg.solver.gamma == 0.8
    assert cfg.solver.episodes == 10
    assert cfg.solver.seed is None
    assert cfg.solver.epsilon == 0.1  # default


def test_shipped_configs_load():
    for path in sorted(CONFIG_DIR.glob("*.yaml")):
        cfg = load_run_config(path)
        Session(cfg.map, cfg.domain, max_states=cfg.solver.max_states)


def test_map_dict_round_trip(tmp_path: Path):
    grid = GridMap(width=3, height=2, start=(0, 0), goal=(2, 1), obstacles=[(1, 1)])
    p = tmp_path / "map.yaml"
    p.write_text(yaml.safe_dump(grid.to_dict()))
    loaded, domain = load_map(p)
    assert loaded == grid
    assert domain is Domain.GRID_WORLD


def test_render_gridworld():
    sess = Session(GridMap(width=3, height=2, start=(0, 0), goal=(2, 1), obstacles=[(1, 1)]), "gridworld")
    sess.value_iteration()
    # top row first
    assert render_policy(sess.model, sess.policy).splitlines() == ["v # G", "> > ^"]
    assert render_state(sess.model, GridState(0, 0)).splitlines() == ["_ # G", "@ _ _"]
    assert "1.00" in render_values(sess.model, sess.values)


def test_render_sokoban_state():
    grid = GridMap(width=4, height=1, start=(0, 0), crates=[(1, 0)], targets=[(3, 0)])
    sess = Session(grid, "sokoban")
    assert render_state(sess.model, sess.model.start_state) == "@ $ _ ."
    sess.step()
    assert render_state(sess.model, sess.current_state) == "_ @ $ ."
