# Shared utilities. Explicit re-exports for a clean public API.

from .io import ensure_dir as ensure_dir, load_yaml as load_yaml, save_json as save_json
from .log import get_logger as get_logger
from .timers import timed as timed

__all__ = [
    "ensure_dir",
    "load_yaml",
    "save_json",
    "get_logger",
    "timed",
]
