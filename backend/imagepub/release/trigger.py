"""
imagepub — Trigger resolution.

Maps the invoking platform's event onto a raw mode string and applies the
repository guard. Schedule runs are nightly; manual dispatch carries a
`mode` input that defaults to nightly.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from imagepub.utils.logging import logger

DISPATCH_EVENT = "workflow_dispatch"


@dataclass(frozen=True)
class TriggerEvent:
    name: str
    repository: str = ""
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def mode(self) -> str:
        return mode_from_event(self.name, self.payload)


def mode_from_event(event_name: str, payload: Mapping[str, Any] | None) -> str:
    """Return the raw mode for an event; '' stands for the nightly default."""
    if event_name != DISPATCH_EVENT:
        return ""
    inputs = (payload or {}).get("inputs") or {}
    return str(inputs.get("mode") or "")


def load_event(env: Mapping[str, str]) -> TriggerEvent:
    """Read the event the runner exported (name, repository, payload file)."""
    payload: dict[str, Any] = {}
    event_path = env.get("GITHUB_EVENT_PATH", "")
    if event_path and Path(event_path).is_file():
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    event = TriggerEvent(
        name=env.get("GITHUB_EVENT_NAME", ""),
        repository=env.get("GITHUB_REPOSITORY", ""),
        payload=payload,
    )
    logger.info("  Trigger: event=%s repository=%s", event.name or "-", event.repository or "-")
    return event


def repository_allowed(current: str, allowed: str) -> bool:
    """Forks and mirrors must not publish; unset values never block."""
    if not current or not allowed:
        return True
    return current == allowed
