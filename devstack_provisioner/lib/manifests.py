from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

_SOURCE_KEYS = ("packages", "services", "snaps", "flatpaks")


class ManifestError(ValueError):
    pass


@dataclass(frozen=True)
class Source:
    """How a component is installed for one package-manager family."""

    packages: Tuple[str, ...] = ()
    services: Tuple[str, ...] = ()
    snaps: Tuple[str, ...] = ()
    flatpaks: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Component:
    component_id: str
    description: str
    required: bool = False
    enabled_by: Optional[str] = None
    port: Optional[int] = None
    url_path: Optional[str] = None
    exclude_distros: Tuple[str, ...] = ()
    sources: Dict[str, Source] = field(default_factory=dict)

    def source_for(self, distro: str, pm_name: str) -> Optional[Source]:
        """Return the install source for this host, or None if unsupported."""
        if distro in self.exclude_distros:
            return None
        return self.sources.get(pm_name)

    def is_enabled(self, cfg: Dict[str, Any]) -> bool:
        if self.component_id in (cfg.get("skip_components") or []):
            return False
        if self.enabled_by is None:
            return True
        return bool(cfg.get(self.enabled_by, False))


def _manifests_dir() -> Path:
    # devstack_provisioner/lib/manifests.py -> devstack_provisioner/manifests
    return Path(__file__).resolve().parents[1] / "manifests"


def _str_list(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ManifestError(f"{where} must be a list")
    return tuple(str(v).strip() for v in value if str(v).strip())


def _parse_source(raw: Any, where: str) -> Source:
    if not isinstance(raw, dict):
        raise ManifestError(f"{where} must be a mapping")
    unknown = set(raw) - set(_SOURCE_KEYS)
    if unknown:
        raise ManifestError(f"{where}: unknown keys {sorted(unknown)}")
    return Source(**{k: _str_list(raw.get(k), f"{where}.{k}") for k in _SOURCE_KEYS})


def parse_component(component_id: str, raw: Any) -> Component:
    where = f"components.{component_id}"
    if not isinstance(raw, dict):
        raise ManifestError(f"{where} must be a mapping")

    sources_raw = raw.get("sources") or {}
    if not isinstance(sources_raw, dict):
        raise ManifestError(f"{where}.sources must be a mapping")

    port = raw.get("port")
    return Component(
        component_id=component_id,
        description=str(raw.get("description") or component_id),
        required=bool(raw.get("required", False)),
        enabled_by=raw.get("enabled_by"),
        port=int(port) if port is not None else None,
        url_path=raw.get("url_path"),
        exclude_distros=_str_list(raw.get("exclude_distros"), f"{where}.exclude_distros"),
        sources={
            str(pm): _parse_source(src, f"{where}.sources.{pm}") for pm, src in sources_raw.items()
        },
    )


def load_components(path: Optional[str] = None) -> Dict[str, Component]:
    """Load the component manifest (defaults to the bundled components.yaml)."""

    p = Path(path) if path else _manifests_dir() / "components.yaml"
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest must be a mapping/dict: {p}")

    comps = data.get("components") or {}
    if not isinstance(comps, dict):
        raise ManifestError(f"{p}: components must be a mapping")

    return {str(cid): parse_component(str(cid), raw) for cid, raw in comps.items()}
