from __future__ import annotations

import logging
from typing import Any, Dict

from ..components import install_component
from ..lib.manifests import load_components

logger = logging.getLogger(__name__)


class InstallDevServicesStep:
    """Database web UI, source-control server and browser editor.

    None of these are required: an unsupported distribution only warns.
    """

    step_id = "40_install_dev_services"
    component_ids = ("db_admin", "forge", "editor")

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        components = load_components()
        for cid in self.component_ids:
            component = components[cid]
            status = install_component(state, component)
            logger.info("%s: %s", component.description, status)
        return state
