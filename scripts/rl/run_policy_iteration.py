#!/usr/bin/env python
from typing import Optional

import typer

from gridmdp.core import get_logger, timed
from gridmdp.rl.config import load_run_config
from gridmdp.rl.render import render_policy, render_state, render_values
from gridmdp.rl.session import Session

app = typer.Typer(add_completion=False)


@app.command()
def main(config: str = "configs/rl/sokoban_one_crate.yaml", gamma: Optional[float] = None):
    cfg = load_run_config(config)
    sc = cfg.solver
    log = get_logger(level=sc.log_level, log_file=sc.log_file)

    sess = Session(cfg.map, cfg.domain, max_states=sc.max_states)
    with timed("policy iteration", log):
        info = sess.policy_iteration(gamma=sc.gamma if gamma is None else gamma)

    typer.echo("Policy Iteration:")
    typer.echo(f" - rounds: {info['rounds']}, evaluation sweeps: {info['sweeps']}")
    typer.echo(render_policy(sess.model, sess.policy))
    typer.echo(render_values(sess.model, sess.values))

    # replay the policy step by step
    typer.echo("\nPlayback:")
    typer.echo(render_state(sess.model, sess.reset()))
    for _ in range(sc.max_steps):
        state, _, done = sess.step()
        typer.echo("")
        typer.echo(render_state(sess.model, state))
        if done:
            break


if __name__ == "__main__":
    app()
