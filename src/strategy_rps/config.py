import copy
import os
import sys
from typing import Optional

import yaml
from loguru import logger

DEFAULTS = {
    "ai": {"seed": None},
    "session": {"max_log": 0},
    "logging": {"level": "INFO", "out_dir": "outputs", "round_csv": False},
    "web": {"cookie": "sid"},
}


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(path: Optional[str] = None) -> dict:
    config_path = path or os.path.join(os.path.dirname(__file__), "config.yaml")
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return _merge(DEFAULTS, data)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=str(level).upper())


def ensure_outputs_dir(out_dir_name: str) -> str:
    # Project root is two levels up from this file ( .../src/strategy_rps/config.py )
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
    out_dir = out_dir_name if os.path.isabs(out_dir_name) else os.path.join(root, out_dir_name)
    os.makedirs(out_dir, exist_ok=True)
    return out_dir
