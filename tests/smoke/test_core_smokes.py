import json
import logging
from pathlib import Path

import pytest

from gridmdp.core import get_logger, load_yaml, save_json, timed


def test_save_json_creates_parents_and_load_yaml_reads_configs(tmp_path: Path):
    p = tmp_path / "runs" / "vi" / "summary.json"
    save_json(p, {"info": {"sweeps": 4}, "reached": True})
    assert json.loads(p.read_text())["info"]["sweeps"] == 4

    q = tmp_path / "map.yaml"
    q.write_text("map:\n  width: 3\n  crates: [[1, 1]]\n")
    assert load_yaml(q)["map"] == {"width": 3, "crates": [[1, 1]]}


def test_logger_does_not_stack_handlers(tmp_path: Path):
    log = get_logger("gridmdp.smoke", level="DEBUG", log_file=str(tmp_path / "logs" / "run.log"))
    assert log.level == logging.DEBUG
    assert len(log.handlers) == 2
    assert len(get_logger("gridmdp.smoke", level="INFO").handlers) == 2


def test_timed_logs_even_when_block_raises(caplog):
    with caplog.at_level(logging.INFO, logger="gridmdp.timer"):
        with timed("noop"):
            pass
        with pytest.raises(RuntimeError):
            with timed("boom"):
                raise RuntimeError("x")
    messages = [r.getMessage() for r in caplog.records]
    assert any("[timer] noop" in m for m in messages)
    assert any("[timer] boom" in m for m in messages)
