from __future__ import annotations

import logging

from .command import probe, run_cmd

logger = logging.getLogger(__name__)


def is_enabled(unit: str) -> bool:
    return probe(["systemctl", "is-enabled", "--quiet", unit]).ok


def is_active(unit: str) -> bool:
    return probe(["systemctl", "is-active", "--quiet", unit]).ok


def enable_service(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "enable", unit], dry_run=dry_run)


def start_service(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "start", unit], dry_run=dry_run)


def restart_service(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "restart", unit], dry_run=dry_run)


def ensure_service(unit: str, *, dry_run: bool = False) -> bool:
    """Enable and start ``unit`` unless it already is. Returns True if anything changed."""

    changed = False
    if not is_enabled(unit):
        enable_service(unit, dry_run=dry_run)
        changed = True
    if not is_active(unit):
        start_service(unit, dry_run=dry_run)
        changed = True

    if changed:
        logger.info("Service %s enabled and started", unit)
    else:
        logger.info("Service %s already enabled and active", unit)
    return changed
