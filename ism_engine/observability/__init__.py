"""
Observability & Audit Layer

RESPONSIBILITY: Recording what the engine did for each analysis run
ALLOWED INPUTS: Audit entries emitted by the engine
OUTPUTS: Read-only lists of AuditLogEntry

WHAT THIS LAYER MUST NOT DO:
============================
- Modify engine behavior
- Filter or interpret events (only record them)
- Make decisions based on logged data
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import hashlib

from ..contracts.base import Timestamp


class AuditEventType(Enum):
    """Explicit audit event types."""
    ANALYSIS = "analysis"
    WARNING = "warning"
    ERROR = "error"
    SYSTEM = "system"


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit log entry."""
    entry_id: str
    event_type: AuditEventType
    timestamp: Timestamp
    action: str
    run_id: Optional[str] = None
    metadata: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def get(self, key: str) -> Optional[str]:
        for name, value in self.metadata:
            if name == key:
                return value
        return None


@dataclass(frozen=True)
class ObservabilityConfig:
    """Configuration for the audit collector."""
    enable_audit: bool = True
    max_entries: int = 10_000


class AuditLogCollector:
    """
    Append-only collector of audit entries.

    When max_entries is reached the oldest entries are dropped first.
    """

    def __init__(self, config: Optional[ObservabilityConfig] = None):
        self._config = config or ObservabilityConfig()
        self._entries: List[AuditLogEntry] = []
        self._sequence: int = 0

    def record(
        self,
        event_type: AuditEventType,
        action: str,
        run_id: Optional[str] = None,
        **metadata: object
    ) -> Optional[AuditLogEntry]:
        if not self._config.enable_audit:
            return None

        self._sequence += 1
        timestamp = Timestamp.now()
        entry_id = hashlib.sha256(
            f"{self._sequence}|{action}|{timestamp.to_iso()}".encode('utf-8')
        ).hexdigest()[:16]

        entry = AuditLogEntry(
            entry_id=f"audit_{entry_id}",
            event_type=event_type,
            timestamp=timestamp,
            action=action,
            run_id=run_id,
            metadata=tuple((key, str(value)) for key, value in sorted(metadata.items())),
        )
        self._entries.append(entry)
        overflow = len(self._entries) - self._config.max_entries
        if overflow > 0:
            del self._entries[:overflow]
        return entry

    def get_entries(self, event_type: Optional[AuditEventType] = None) -> List[AuditLogEntry]:
        """Get entries, optionally filtered by type."""
        if event_type is None:
            return list(self._entries)
        return [e for e in self._entries if e.event_type == event_type]

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def clear(self):
        self._entries.clear()
