from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def ensure_dir(path: Path | str) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def save_json(path: Path | str, payload: Any) -> None:
    """Write a run summary; parent folders are created as needed."""
    p = Path(path)
    ensure_dir(p.parent)
    p.write_text(json.dumps(payload, indent=2, default=str))


def load_yaml(path: Path | str) -> Any:
    return yaml.safe_load(Path(path).read_text())
