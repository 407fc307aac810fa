"""In-process event log for assembly runs.

Subscribers register an exact topic (``writer.completed``), a topic prefix
(``dispatch.*``) or everything (``*``).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from dais.models import utc_now


@dataclass(slots=True)
class InternalEvent:
    topic: str
    ts: datetime
    payload: dict[str, Any] = field(default_factory=dict)


EventCallback = Callable[[InternalEvent], None]


def topic_matches(pattern: str, topic: str) -> bool:
    if pattern == "*" or pattern == topic:
        return True
    if pattern.endswith(".*"):
        return topic.startswith(pattern[:-1])
    return False


class EventBus:
    def __init__(self) -> None:
        self._subscriptions: list[tuple[str, EventCallback]] = []
        self._log: list[InternalEvent] = []

    def subscribe(self, pattern: str, callback: EventCallback) -> None:
        self._subscriptions.append((pattern, callback))

    def emit(self, topic: str, **payload: Any) -> InternalEvent:
        event = InternalEvent(topic=topic, ts=utc_now(), payload=payload)
        self._log.append(event)
        for pattern, callback in self._subscriptions:
            if topic_matches(pattern, topic):
                callback(event)
        return event

    def recent(self, limit: int = 100) -> list[InternalEvent]:
        return self._log[-limit:] if limit > 0 else []

    def topics(self) -> list[str]:
        return [event.topic for event in self._log]
