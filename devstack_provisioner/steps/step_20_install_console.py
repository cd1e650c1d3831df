from __future__ import annotations

import logging
from typing import Any, Dict

from ..components import install_component
from ..lib.manifests import load_components

logger = logging.getLogger(__name__)


class InstallConsoleStep:
    step_id = "20_install_console"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        console = load_components()["console"]
        status = install_component(state, console)
        logger.info("%s: %s", console.description, status)
        return state
