#!/usr/bin/env python
from typing import Optional

import numpy as np
import typer

from gridmdp.core import get_logger, timed
from gridmdp.rl.config import load_run_config
from gridmdp.rl.render import render_policy, render_values
from gridmdp.rl.session import Session

app = typer.Typer(add_completion=False)


@app.command()
def main(
    config: str = "configs/rl/gridworld_4x4.yaml",
    episodes: Optional[int] = None,
    every_visit: bool = False,
):
    cfg = load_run_config(config)
    sc = cfg.solver
    log = get_logger(level=sc.log_level, log_file=sc.log_file)

    sess = Session(cfg.map, cfg.domain, rng=np.random.default_rng(sc.seed), max_states=sc.max_states)
    with timed("monte carlo", log):
        info = sess.monte_carlo(
            episodes=episodes or sc.episodes,
            gamma=sc.gamma,
            max_steps=sc.max_steps,
            epsilon=sc.epsilon,
            first_visit=sc.first_visit and not every_visit,
        )
    G, steps, ok = sess.run_policy(max_steps=sc.max_steps)

    typer.echo("Monte Carlo control:")
    typer.echo(f" - successes: {info['successes']}/{info['episodes']}, mean length {info['mean_length']:.1f}")
    typer.echo(f" - rollout: return={G:.3f}, steps={steps}, reached={ok}")
    typer.echo(render_policy(sess.model, sess.policy))
    typer.echo(render_values(sess.model, sess.values))


if __name__ == "__main__":
    app()
