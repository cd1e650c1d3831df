from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    config_default: str = "/etc/devstack-provisioner/config.yaml"
    log_default: str = "/var/log/devstack-provisioner.log"
    mariadb_dropin_apt: str = "/etc/mysql/mariadb.conf.d/99-devstack.cnf"
    mariadb_dropin_default: str = "/etc/my.cnf.d/99-devstack.cnf"
    mariadb_system_db: str = "/var/lib/mysql/mysql"


PATHS = Paths()

CONFIG_ENV_VAR = "DEVSTACK_PROVISIONER_CONFIG"

# Cockpit listens here; the only port the firewall step opens.
CONSOLE_PORT = 9090

FLATHUB_URL = "https://flathub.org/repo/flathub.flatpakrepo"
