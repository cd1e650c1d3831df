from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..components import get_installer
from ..lib.distro import detect_distro
from ..state import record_decision

logger = logging.getLogger(__name__)


class DetectDistroStep:
    step_id = "10_detect_distro"

    def __init__(self, root: Path = Path("/")) -> None:
        self.root = root

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        distro = detect_distro(self.root)
        state["distro"] = distro

        pm = get_installer(state).pm
        record_decision(state, "distro", distro)
        record_decision(state, "package_manager", pm.name)
        logger.info("Distribution %s uses %s", distro, pm.name)
        return state
