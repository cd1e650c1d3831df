from __future__ import annotations

import logging
from typing import Any, Dict

from ..components import install_component
from ..lib.manifests import load_components

logger = logging.getLogger(__name__)


class InstallDesktopExtrasStep:
    """Android Studio from Flathub and MySQL Workbench from the Snap Store.

    Opt-in via config.desktop_extras.
    """

    step_id = "60_install_desktop_extras"
    component_ids = ("android_studio", "mysql_workbench")

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        if not bool(cfg.get("desktop_extras", False)):
            logger.info("Desktop extras disabled (config.desktop_extras=false)")
            return state

        components = load_components()
        for cid in self.component_ids:
            install_component(state, components[cid])
        return state
