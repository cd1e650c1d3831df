from __future__ import annotations

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


def new_state(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """In-memory run state handed from step to step. Never persisted."""

    return {
        "config": cfg,
        "distro": None,
        "execution": {
            "current_step": None,
            "ran_steps": [],
            "warnings": [],
            "decisions": {},
            "components": {},
        },
    }


def add_warning(state: Dict[str, Any], message: str) -> None:
    logger.warning("%s", message)
    state.setdefault("execution", {}).setdefault("warnings", []).append(message)


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def record_component(state: Dict[str, Any], component_id: str, status: str) -> None:
    state.setdefault("execution", {}).setdefault("components", {})[component_id] = status


def component_status(state: Dict[str, Any], component_id: str) -> str | None:
    return ((state.get("execution") or {}).get("components") or {}).get(component_id)


def is_dry_run(state: Dict[str, Any]) -> bool:
    return bool((state.get("config") or {}).get("dry_run", False))
