from __future__ import annotations

import os
from typing import Any, Dict
import yaml


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a named mapping section of the config, or {} when absent or null."""
    value = config.get(name)
    return value if isinstance(value, dict) else {}


CONFIG_PATH = os.environ.get("CHANNEL_URI_CONFIG_PATH", os.path.join(os.path.dirname(os.path.dirname(__file__)), "..", "config.yaml"))


__all__ = ["load_config", "section", "CONFIG_PATH"]
