from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import CONSOLE_PORT
from ..lib.firewall import detect_firewall, open_port
from ..state import add_warning, is_dry_run, record_decision

logger = logging.getLogger(__name__)


class ConfigureFirewallStep:
    step_id = "70_configure_firewall"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        manager = detect_firewall()
        record_decision(state, "firewall", manager)

        opened = open_port(CONSOLE_PORT, manager=manager, dry_run=is_dry_run(state))
        if opened is None:
            add_warning(
                state,
                f"No firewalld or ufw found; open port {CONSOLE_PORT}/tcp manually if a firewall is in use",
            )
        record_decision(state, "console_port_opened", opened)
        return state
