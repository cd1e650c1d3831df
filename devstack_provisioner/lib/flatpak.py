from __future__ import annotations

import logging
from typing import List, Sequence

from .command import probe, run_cmd
from .env import FLATHUB_URL
from .pkg import PackageInstaller

logger = logging.getLogger(__name__)


def installed_apps() -> List[str]:
    r = probe(["flatpak", "list", "--app", "--columns=application"])
    if not r.ok:
        return []
    return [ln.strip() for ln in r.stdout.splitlines() if ln.strip()]


def ensure_flathub(installer: PackageInstaller) -> None:
    installer.ensure(["flatpak"])
    run_cmd(
        ["flatpak", "remote-add", "--system", "--if-not-exists", "flathub", FLATHUB_URL],
        dry_run=installer.dry_run,
    )


def ensure_flatpaks(installer: PackageInstaller, app_ids: Sequence[str]) -> List[str]:
    if not app_ids:
        return []
    ensure_flathub(installer)

    present = set(installed_apps())
    installed: List[str] = []
    for app_id in app_ids:
        if app_id in present:
            logger.info("Flatpak %s already installed", app_id)
            continue
        logger.info("Installing flatpak %s", app_id)
        run_cmd(["flatpak", "install", "--system", "-y", "flathub", app_id], dry_run=installer.dry_run)
        installed.append(app_id)
    return installed
