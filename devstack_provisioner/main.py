from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Dict, Optional

from .config import config_path, ensure_defaults, load_config
from .logging_utils import configure_logging
from .pipeline import run_pipeline
from .state import new_state
from .steps import (
    ConfigureFirewallStep,
    DetectDistroStep,
    InstallConsoleStep,
    InstallDatabaseStep,
    InstallDesktopExtrasStep,
    InstallDevServicesStep,
    PrintGuidanceStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        DetectDistroStep(),
        InstallConsoleStep(),
        InstallDatabaseStep(),
        InstallDevServicesStep(),
        InstallDesktopExtrasStep(),
        ConfigureFirewallStep(),
        PrintGuidanceStep(),
    ]


def require_root(cfg: Dict[str, Any]) -> None:
    if bool(cfg.get("dry_run", False)):
        return
    if os.geteuid() != 0:
        raise PermissionError("devstack-provisioner must be run as root (try sudo)")


def run(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Provision this host. Raises on the first fatal failure."""

    state = new_state(cfg)
    try:
        result = run_pipeline(state=state, steps=build_steps())
        return result.state
    except Exception:
        logger.exception("Provisioning failed at step %s", state["execution"].get("current_step"))
        raise


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="devstack-provisioner",
        description=(
            "Install the Cockpit console, MariaDB, phpMyAdmin, Gitea and code-server, "
            "open the console port and print operational guidance. "
            f"Settings are read from {config_path()} when present."
        ),
    )
    p.parse_args(argv)

    try:
        cfg = ensure_defaults(load_config())
    except (OSError, ValueError) as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        configure_logging(log_path=str(cfg["log_path"]))
        require_root(cfg)
        run(cfg)
    except (RuntimeError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
