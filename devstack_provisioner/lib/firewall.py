from __future__ import annotations

import logging
import re
import shutil
from typing import Optional

from .command import probe, run_cmd

logger = logging.getLogger(__name__)


def firewalld_running() -> bool:
    return probe(["firewall-cmd", "--state"]).ok


def detect_firewall() -> Optional[str]:
    """Return 'firewalld', 'ufw', 'firewalld-offline' or None.

    A running firewalld wins over ufw. An installed but stopped firewalld is
    only used (through firewall-offline-cmd) when ufw is absent.
    """

    has_firewalld = shutil.which("firewall-cmd") is not None
    if has_firewalld and firewalld_running():
        return "firewalld"
    if shutil.which("ufw"):
        return "ufw"
    if has_firewalld and shutil.which("firewall-offline-cmd"):
        return "firewalld-offline"
    return None


def _firewalld_port_open(rule: str) -> bool:
    return probe(["firewall-cmd", f"--query-port={rule}"]).ok


def _ufw_port_open(rule: str) -> bool:
    r = probe(["ufw", "status"])
    if not r.ok:
        return False
    # Rule lines look like "9090/tcp   ALLOW   Anywhere"
    pattern = re.compile(rf"^{re.escape(rule)}(\s|$)")
    return any(pattern.match(ln.strip()) for ln in r.stdout.splitlines())


def open_port(
    port: int,
    *,
    proto: str = "tcp",
    manager: Optional[str] = None,
    dry_run: bool = False,
) -> Optional[bool]:
    """Open ``port`` in whichever firewall manager is present.

    Returns True if a rule was added, False if already open, None if no
    supported firewall manager was found.
    """

    rule = f"{port}/{proto}"
    if manager is None:
        manager = detect_firewall()

    if manager == "firewalld":
        if _firewalld_port_open(rule):
            logger.info("firewalld: %s already open", rule)
            return False
        run_cmd(["firewall-cmd", "--permanent", f"--add-port={rule}"], dry_run=dry_run)
        run_cmd(["firewall-cmd", "--reload"], dry_run=dry_run)
        logger.info("firewalld: opened %s", rule)
        return True

    if manager == "firewalld-offline":
        if probe(["firewall-offline-cmd", f"--query-port={rule}"]).ok:
            logger.info("firewalld (stopped): %s already open", rule)
            return False
        # Lands in the permanent config; applied when firewalld next starts.
        run_cmd(["firewall-offline-cmd", f"--add-port={rule}"], dry_run=dry_run)
        logger.info("firewalld (stopped): opened %s in permanent config", rule)
        return True

    if manager == "ufw":
        if _ufw_port_open(rule):
            logger.info("ufw: %s already open", rule)
            return False
        run_cmd(["ufw", "allow", rule], dry_run=dry_run)
        logger.info("ufw: opened %s", rule)
        return True

    return None
