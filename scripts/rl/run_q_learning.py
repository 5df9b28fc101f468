#!/usr/bin/env python
from typing import Optional

import numpy as np
import typer

from gridmdp.core import get_logger, timed
from gridmdp.rl.config import load_run_config
from gridmdp.rl.render import render_policy
from gridmdp.rl.session import Session

app = typer.Typer(add_completion=False)


@app.command()
def main(config: str = "configs/rl/gridworld_4x4.yaml", episodes: Optional[int] = None):
    cfg = load_run_config(config)
    sc = cfg.solver
    log = get_logger(level=sc.log_level, log_file=sc.log_file)

    sess = Session(cfg.map, cfg.domain, rng=np.random.default_rng(sc.seed), max_states=sc.max_states)
    with timed("q-learning", log):
        info = sess.q_learning(
            episodes=episodes or sc.episodes,
            alpha=sc.alpha,
            gamma=sc.gamma,
            epsilon=sc.epsilon,
            max_steps=sc.max_steps,
        )
    G, steps, ok = sess.run_policy(max_steps=sc.max_steps)

    typer.echo("Q-learning:")
    typer.echo(f" - successes: {info['successes']}/{info['episodes']}")
    typer.echo(f" - rollout: return={G:.3f}, steps={steps}, reached={ok}")
    typer.echo(render_policy(sess.model, sess.policy))


if __name__ == "__main__":
    app()
