from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..components import install_component
from ..lib.command import run_cmd
from ..lib.env import PATHS
from ..lib.files import ensure_file
from ..lib.manifests import Source, load_components
from ..lib.pkg import PackageInstaller
from ..lib.services import is_active, restart_service
from ..state import record_decision

logger = logging.getLogger(__name__)

# Keep the database off the network; reach it through the admin UI or SSH.
MARIADB_DROPIN = "[mysqld]\nbind-address = 127.0.0.1\n"


def dropin_path(pm_name: str) -> str:
    if pm_name == "apt":
        return PATHS.mariadb_dropin_apt
    return PATHS.mariadb_dropin_default


class InstallDatabaseStep:
    step_id = "30_install_database"

    def __init__(self, system_db: str = PATHS.mariadb_system_db) -> None:
        self.system_db = system_db

    def _prepare(self, installer: PackageInstaller, source: Source) -> bool:
        changed = False
        dry_run = installer.dry_run

        # Arch ships MariaDB without an initialised data directory.
        if installer.pm.name == "pacman" and not Path(self.system_db).exists():
            run_cmd(
                ["mariadb-install-db", "--user=mysql", "--basedir=/usr", "--datadir=/var/lib/mysql"],
                dry_run=dry_run,
            )
            changed = True

        path = dropin_path(installer.pm.name)
        if ensure_file(path, MARIADB_DROPIN, dry_run=dry_run):
            changed = True
            # A running server only picks the drop-in up on restart.
            for unit in source.services:
                if is_active(unit):
                    restart_service(unit, dry_run=dry_run)
        return changed

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        database = load_components()["database"]
        status = install_component(state, database, pre_start=self._prepare)

        installer = (state.get("runtime") or {}).get("installer")
        if installer is not None:
            record_decision(state, "mariadb_dropin", dropin_path(installer.pm.name))
        logger.info("%s: %s", database.description, status)
        return state
