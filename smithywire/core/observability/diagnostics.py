"""
Diagnostic sink — records what the wiring pass decided.

Every component of the pass receives the sink explicitly and reports
its decisions through ``publish()``.  Events are kept in order for
inspection (CLI report, tests) and forwarded to ``logging``.

Message standard (v1)
─────────────────────
Every event is a dict with these fields::

    {
        "v": 1,                         # schema version
        "ts": 1739648400.123,           # wall-clock timestamp
        "seq": 3,                       # monotonic sequence within the sink
        "type": "cli:detected",         # <domain>:<action>
        "key": "smithyCli",             # element the event is about
        "data": { ... },                # event-specific payload
    }

Event types emitted by the pass:

    sources:extended     one per source set given the smithy extension
    sources:resources    generated resources registered on ``main``
    cli:pinned           CLI already declared by the user, nothing added
    cli:override         CLI version taken from smithy.cli_version_override
    cli:detected         CLI version taken from a smithy-model dependency
    cli:default          no smithy-model dependency, default version used
    task:enabled         generation task enabled state resolved
    task:wired           generation task added as a prerequisite
    task:skipped         generation task disabled, graph unchanged
    lifecycle:wired      the pass completed
"""

from __future__ import annotations

import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

_SCHEMA_VERSION = 1

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
}


class DiagnosticSink:
    """Ordered, in-memory record of diagnostic events."""

    def __init__(self) -> None:
        self._seq: int = 0
        self._events: list[dict[str, Any]] = []

    @property
    def seq(self) -> int:
        """Sequence number of the last event (0 when empty)."""
        return self._seq

    @property
    def events(self) -> list[dict[str, Any]]:
        return list(self._events)

    def publish(
        self,
        event_type: str,
        *,
        key: str = "",
        data: dict[str, Any] | None = None,
        message: str = "",
        level: str = "info",
    ) -> dict[str, Any]:
        """Record an event and log ``message`` at ``level``.

        Returns:
            The full event dict with ``seq`` assigned.
        """
        self._seq += 1
        event: dict[str, Any] = {
            "v": _SCHEMA_VERSION,
            "ts": time.time(),
            "seq": self._seq,
            "type": event_type,
            "key": key,
            "data": data or {},
        }
        if message:
            event["message"] = message
        self._events.append(event)

        logger.log(
            _LEVELS.get(level, logging.INFO),
            "%s",
            message or f"event {event_type} key={key or '-'}",
        )
        return event

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        """Events of one type, in publish order."""
        return [e for e in self._events if e["type"] == event_type]

    def types(self) -> list[str]:
        return [e["type"] for e in self._events]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
