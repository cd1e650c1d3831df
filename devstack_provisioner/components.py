from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .lib.distro import UnsupportedDistroError
from .lib.flatpak import ensure_flatpaks
from .lib.manifests import Component, Source
from .lib.pkg import PackageInstaller, package_manager_for
from .lib.services import ensure_service
from .lib.snap import ensure_snaps
from .state import add_warning, is_dry_run, record_component

logger = logging.getLogger(__name__)


def get_installer(state: Dict[str, Any]) -> PackageInstaller:
    """Return the run-wide installer so the package index is refreshed only once."""

    runtime = state.setdefault("runtime", {})
    installer = runtime.get("installer")
    if installer is None:
        distro = state.get("distro")
        if not distro:
            raise RuntimeError("distro not detected yet")
        installer = PackageInstaller(package_manager_for(distro), dry_run=is_dry_run(state))
        runtime["installer"] = installer
    return installer


def install_component(
    state: Dict[str, Any],
    component: Component,
    *,
    pre_start: Optional[Callable[[PackageInstaller, Source], bool]] = None,
) -> str:
    """Bring one component to its installed/enabled end state.

    ``pre_start`` runs after packages are in place and before services are
    started; it returns True if it changed anything.

    Returns the recorded status: installed, present, disabled or unsupported.
    """

    cfg = state.get("config") or {}
    cid = component.component_id

    if not component.is_enabled(cfg):
        logger.info("Skipping %s (not enabled)", component.description)
        record_component(state, cid, "disabled")
        return "disabled"

    installer = get_installer(state)
    distro = str(state.get("distro"))
    source = component.source_for(distro, installer.pm.name)

    if source is None:
        if component.required:
            raise UnsupportedDistroError(f"{component.description} is not available on {distro}")
        add_warning(state, f"{component.description} is not supported on {distro}; skipped")
        record_component(state, cid, "unsupported")
        return "unsupported"

    logger.info("Ensuring %s", component.description)
    dry_run = installer.dry_run
    changed = bool(installer.ensure(source.packages))
    changed = bool(ensure_snaps(installer, source.snaps)) or changed
    changed = bool(ensure_flatpaks(installer, source.flatpaks)) or changed
    if pre_start is not None:
        changed = pre_start(installer, source) or changed
    for unit in source.services:
        changed = ensure_service(unit, dry_run=dry_run) or changed

    status = "installed" if changed else "present"
    record_component(state, cid, status)
    return status
