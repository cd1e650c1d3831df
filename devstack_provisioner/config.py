from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .lib.env import CONFIG_ENV_VAR, PATHS

logger = logging.getLogger(__name__)


def config_path() -> str:
    return os.environ.get(CONFIG_ENV_VAR) or PATHS.config_default


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the optional YAML config. A missing file yields an empty config."""

    p = Path(path or config_path())
    if not p.exists():
        return {}

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file must be a mapping/dict, got {type(data).__name__}: {p}")
    return data


def ensure_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with defaults (without overriding user values)."""

    cfg.setdefault("dry_run", False)
    cfg.setdefault("log_path", PATHS.log_default)
    # Desktop tools from Flathub/Snap Store; off for servers.
    cfg.setdefault("desktop_extras", False)
    cfg.setdefault("skip_components", [])

    if not isinstance(cfg["skip_components"], list):
        raise ValueError("config.skip_components must be a list of component ids")
    return cfg
