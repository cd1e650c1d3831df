from __future__ import annotations

import logging
import socket
import sys
from typing import Any, Dict, List, Optional, TextIO

from ..lib.env import CONSOLE_PORT
from ..lib.manifests import load_components
from ..state import component_status

logger = logging.getLogger(__name__)

SECURITY_NOTES = [
    "Run 'mysql_secure_installation' to set a root password and drop test data.",
    "MariaDB only listens on 127.0.0.1; use phpMyAdmin or an SSH tunnel to reach it.",
    "Set a strong password in ~/.config/code-server/config.yaml and restart code-server.",
    "Finish the Gitea web installer right away; the first account becomes admin.",
    "Only port 9090/tcp was opened. Keep the other services behind SSH tunnels or a reverse proxy with TLS.",
    "Cockpit logs in with system accounts; disable password SSH logins for root.",
    "Keep the host patched: apply package updates regularly.",
]


def render_guidance(state: Dict[str, Any], *, hostname: Optional[str] = None) -> str:
    host = hostname or socket.gethostname()
    lines: List[str] = []

    lines.append("Provisioning complete.")
    lines.append("")
    lines.append("Services:")
    lines.append(f"  Cockpit web console: https://{host}:{CONSOLE_PORT}/")
    for component in load_components().values():
        if component.component_id == "console" or component.port is None:
            continue
        if component_status(state, component.component_id) not in {"installed", "present"}:
            continue
        if component.component_id == "database":
            lines.append(f"  {component.description}: 127.0.0.1:{component.port}")
            continue
        path = component.url_path or "/"
        lines.append(f"  {component.description}: http://{host}:{component.port}{path}")

    lines.append("")
    lines.append("Security:")
    for note in SECURITY_NOTES:
        lines.append(f"  - {note}")

    warnings = (state.get("execution") or {}).get("warnings") or []
    if warnings:
        lines.append("")
        lines.append("Warnings:")
        for w in warnings:
            lines.append(f"  - {w}")

    return "\n".join(lines) + "\n"


class PrintGuidanceStep:
    step_id = "90_print_guidance"

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        out = self.out or sys.stdout
        out.write(render_guidance(state))
        out.flush()
        return state
