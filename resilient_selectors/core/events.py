from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Iterator, Protocol


@dataclass(frozen=True, slots=True)
class HealingEvent:
    original_selector: str
    healed_selector: str
    action: str
    timestamp: str
    provider_name: str

    @classmethod
    def now(cls, original_selector: str, healed_selector: str, action: str, provider_name: str) -> HealingEvent:
        return cls(
            original_selector=original_selector,
            healed_selector=healed_selector,
            action=action,
            timestamp=datetime.now(UTC).isoformat(),
            provider_name=provider_name,
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class HealingEventSink(Protocol):
    def write(self, event: HealingEvent) -> None: ...


class HealingEventLog:
    """Append-only provenance records for one session."""

    def __init__(self, sink: HealingEventSink | None = None) -> None:
        self._events: list[HealingEvent] = []
        self._sink = sink

    def append(self, event: HealingEvent) -> None:
        self._events.append(event)
        if self._sink is not None:
            self._sink.write(event)

    @property
    def events(self) -> tuple[HealingEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[HealingEvent]:
        return iter(tuple(self._events))
