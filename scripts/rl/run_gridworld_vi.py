#!/usr/bin/env python
from typing import Optional

import numpy as np
import typer

from gridmdp.core import get_logger, save_json, timed
from gridmdp.rl.config import load_run_config
from gridmdp.rl.render import render_policy, render_values
from gridmdp.rl.session import Session

app = typer.Typer(add_completion=False)


@app.command()
def main(
    config: str = "configs/rl/gridworld_4x4.yaml",
    gamma: Optional[float] = None,
    out_json: Optional[str] = None,
):
    cfg = load_run_config(config)
    sc = cfg.solver
    log = get_logger(level=sc.log_level, log_file=sc.log_file)
    gamma = sc.gamma if gamma is None else gamma

    sess = Session(cfg.map, cfg.domain, rng=np.random.default_rng(sc.seed), max_states=sc.max_states)
    with timed("value iteration", log):
        info = sess.value_iteration(gamma=gamma, max_sweeps=sc.max_sweeps)
    G, steps, ok = sess.run_policy(max_steps=sc.max_steps)

    typer.echo("Value Iteration:")
    typer.echo(f" - sweeps: {info['sweeps']}, residual: {info['residual']:.3e}")
    typer.echo(f" - start value: {sess.values.get(sess.model.start_state):.3f}")
    typer.echo(f" - rollout: return={G:.3f}, steps={steps}, reached={ok}")
    typer.echo(" - policy:")
    typer.echo(render_policy(sess.model, sess.policy))
    typer.echo(" - values:")
    typer.echo(render_values(sess.model, sess.values))

    if out_json:
        save_json(out_json, {"info": info, "steps": steps, "reached": ok, "map": cfg.map.to_dict()})


if __name__ == "__main__":
    app()
