"""Audit event creation and JSONL logging."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from .types import FilterStats


@dataclass(frozen=True)
class AuditEvent:
    """Structured audit record for a single filtering pass."""

    timestamp: str
    segments: int
    candidates_seen: int
    removed: Dict[str, int]
    normalized: int
    normalization_policy: str
    changed: bool


def build_audit_event(stats: FilterStats, timestamp: Optional[str] = None) -> AuditEvent:
    """Build an audit event from pass statistics."""

    event_time = timestamp or datetime.now(timezone.utc).isoformat()
    return AuditEvent(
        timestamp=event_time,
        segments=stats.segments,
        candidates_seen=stats.candidates_seen,
        removed=dict(stats.removed),
        normalized=stats.normalized,
        normalization_policy=stats.normalization_policy,
        changed=stats.changed,
    )


def audit_event_to_json(event: AuditEvent) -> str:
    """Serialize an audit event to a JSON string."""

    return json.dumps(event.__dict__, sort_keys=True, ensure_ascii=True)


class AuditLogger:
    """Append-only JSONL audit log writer."""

    def __init__(self, path: Path) -> None:
        """Initialize a logger that appends to the given path."""

        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, stats: FilterStats, timestamp: Optional[str] = None) -> None:
        """Append pass statistics to the JSONL audit log."""

        event = build_audit_event(stats, timestamp=timestamp)
        payload = audit_event_to_json(event)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(payload + "\n")
