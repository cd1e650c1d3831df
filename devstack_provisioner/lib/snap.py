from __future__ import annotations

import logging
from typing import List, Sequence

from .command import probe, run_cmd
from .pkg import PackageInstaller
from .services import ensure_service

logger = logging.getLogger(__name__)


def snap_installed(name: str) -> bool:
    return probe(["snap", "list", name]).ok


def ensure_snapd(installer: PackageInstaller) -> None:
    """Install snapd, enable its socket and wait for the first seeding."""

    installer.ensure(["snapd"])
    ensure_service("snapd.socket", dry_run=installer.dry_run)
    run_cmd(["snap", "wait", "system", "seed.loaded"], dry_run=installer.dry_run)


def ensure_snaps(installer: PackageInstaller, names: Sequence[str]) -> List[str]:
    if not names:
        return []
    ensure_snapd(installer)

    installed: List[str] = []
    for name in names:
        if snap_installed(name):
            logger.info("Snap %s already installed", name)
            continue
        logger.info("Installing snap %s", name)
        run_cmd(["snap", "install", name], dry_run=installer.dry_run)
        installed.append(name)
    return installed
