from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SUPPORTED_DISTROS = ("ubuntu", "debian", "fedora", "rhel", "centos", "arch", "opensuse")

_ALIASES = {
    "ubuntu": "ubuntu",
    "linuxmint": "ubuntu",
    "pop": "ubuntu",
    "elementary": "ubuntu",
    "zorin": "ubuntu",
    "neon": "ubuntu",
    "debian": "debian",
    "raspbian": "debian",
    "kali": "debian",
    "fedora": "fedora",
    "rhel": "rhel",
    "redhatenterpriseserver": "rhel",
    "rocky": "rhel",
    "almalinux": "rhel",
    "ol": "rhel",
    "centos": "centos",
    "arch": "arch",
    "archarm": "arch",
    "manjaro": "arch",
    "endeavouros": "arch",
    "opensuse": "opensuse",
    "opensuse-leap": "opensuse",
    "opensuse-tumbleweed": "opensuse",
    "sles": "opensuse",
    "suse": "opensuse",
}

# Checked in order; debian_version last because derivatives ship it too.
_MARKER_FILES = (
    ("etc/arch-release", "arch"),
    ("etc/fedora-release", "fedora"),
    ("etc/centos-release", "centos"),
    ("etc/redhat-release", "rhel"),
    ("etc/SuSE-release", "opensuse"),
    ("etc/debian_version", "debian"),
)


class UnsupportedDistroError(RuntimeError):
    pass


def normalize_distro(raw: str) -> Optional[str]:
    key = raw.strip().strip('"').strip("'").lower()
    if key in _ALIASES:
        return _ALIASES[key]
    # e.g. "opensuse-microos", "centos-stream"
    for prefix in ("opensuse", "centos"):
        if key.startswith(prefix):
            return _ALIASES[prefix]
    return None


def parse_key_value_file(text: str) -> Dict[str, str]:
    """Parse os-release / lsb-release style KEY=value lines."""

    data: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        data[k.strip()] = v.strip().strip('"').strip("'")
    return data


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return None


def _from_os_release(root: Path) -> Optional[Tuple[str, str]]:
    for rel in ("etc/os-release", "usr/lib/os-release"):
        text = _read_text(root / rel)
        if text is None:
            continue
        data = parse_key_value_file(text)
        token = normalize_distro(data.get("ID", ""))
        if token:
            return token, f"{rel}:ID"
        for like in data.get("ID_LIKE", "").split():
            token = normalize_distro(like)
            if token:
                return token, f"{rel}:ID_LIKE"
    return None


def _from_lsb_release(root: Path) -> Optional[Tuple[str, str]]:
    text = _read_text(root / "etc/lsb-release")
    if text is None:
        return None
    token = normalize_distro(parse_key_value_file(text).get("DISTRIB_ID", ""))
    if token:
        return token, "etc/lsb-release:DISTRIB_ID"
    return None


def _from_marker_files(root: Path) -> Optional[Tuple[str, str]]:
    for rel, token in _MARKER_FILES:
        if (root / rel).exists():
            if rel == "etc/redhat-release":
                # CentOS used to ship only redhat-release.
                text = (_read_text(root / rel) or "").lower()
                if "centos" in text:
                    return "centos", rel
            return token, rel
    return None


def detect_distro(root: Path = Path("/")) -> str:
    """Return one token from SUPPORTED_DISTROS for the host rooted at ``root``.

    Sources in order: os-release (ID, then ID_LIKE), lsb-release, marker files.
    """

    for source in (_from_os_release, _from_lsb_release, _from_marker_files):
        found = source(root)
        if found:
            token, evidence = found
            logger.info("Detected distribution %s (from %s)", token, evidence)
            return token

    raise UnsupportedDistroError(
        "Unable to identify the Linux distribution "
        f"(supported: {', '.join(SUPPORTED_DISTROS)})"
    )
