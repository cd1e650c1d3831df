from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .command import probe, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageManager:
    """Capability set of one package-manager family.

    Each argv template is a prefix; package names are appended.
    """

    name: str
    refresh_argv: Tuple[str, ...]
    query_argv: Tuple[str, ...]
    install_argv: Tuple[str, ...]
    env: Dict[str, str] = field(default_factory=dict)

    def query_installed(self, package: str) -> bool:
        r = probe([*self.query_argv, package])
        if self.name == "apt":
            # dpkg-query succeeds for removed-but-not-purged packages too.
            return r.ok and "install ok installed" in r.stdout
        return r.ok

    def refresh(self, *, dry_run: bool = False) -> None:
        run_cmd(self.refresh_argv, env=self.env, dry_run=dry_run)

    def install(self, packages: Sequence[str], *, dry_run: bool = False) -> None:
        if not packages:
            return
        run_cmd([*self.install_argv, *packages], env=self.env, dry_run=dry_run)


APT = PackageManager(
    name="apt",
    refresh_argv=("apt-get", "update"),
    query_argv=("dpkg-query", "-W", "-f=${Status}"),
    install_argv=("apt-get", "install", "-y"),
    env={"DEBIAN_FRONTEND": "noninteractive"},
)

DNF = PackageManager(
    name="dnf",
    refresh_argv=("dnf", "makecache"),
    query_argv=("rpm", "-q"),
    install_argv=("dnf", "install", "-y"),
)

PACMAN = PackageManager(
    name="pacman",
    refresh_argv=("pacman", "-Sy"),
    query_argv=("pacman", "-Q"),
    install_argv=("pacman", "-S", "--noconfirm", "--needed"),
)

ZYPPER = PackageManager(
    name="zypper",
    refresh_argv=("zypper", "--non-interactive", "refresh"),
    query_argv=("rpm", "-q"),
    install_argv=("zypper", "--non-interactive", "install"),
)

_BY_DISTRO = {
    "ubuntu": APT,
    "debian": APT,
    "fedora": DNF,
    "rhel": DNF,
    "centos": DNF,
    "arch": PACMAN,
    "opensuse": ZYPPER,
}


def package_manager_for(distro: str) -> PackageManager:
    try:
        return _BY_DISTRO[distro]
    except KeyError:
        raise ValueError(f"No package manager known for distribution {distro!r}") from None


class PackageInstaller:
    """Installs packages only when missing; refreshes the index at most once per run."""

    def __init__(self, pm: PackageManager, *, dry_run: bool = False) -> None:
        self.pm = pm
        self.dry_run = dry_run
        self.refreshed = False

    def missing(self, packages: Sequence[str]) -> List[str]:
        return [p for p in packages if not self.pm.query_installed(p)]

    def ensure(self, packages: Sequence[str]) -> List[str]:
        """Install the missing subset of ``packages``; return what was installed."""

        if not packages:
            return []
        missing = self.missing(packages)
        if not missing:
            logger.info("Already installed: %s", ", ".join(packages))
            return []

        if not self.refreshed:
            self.pm.refresh(dry_run=self.dry_run)
            self.refreshed = True

        logger.info("Installing via %s: %s", self.pm.name, ", ".join(missing))
        self.pm.install(missing, dry_run=self.dry_run)
        return missing
