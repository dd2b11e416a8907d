from __future__ import annotations

import json
from pathlib import Path

from resilient_selectors.core.events import HealingEvent


class HealingAuditLogger:
    """Persists recorded healing events as JSON lines."""

    def __init__(self, root: str | Path = "artifacts") -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.healed_selectors_path = self.root / "healed_selectors.jsonl"

    def write(self, event: HealingEvent) -> None:
        with self.healed_selectors_path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(event.to_dict()) + "\n")

    def read_events(self) -> list[HealingEvent]:
        if not self.healed_selectors_path.exists():
            return []
        events: list[HealingEvent] = []
        with self.healed_selectors_path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                events.append(HealingEvent(**json.loads(line)))
        return events

    def contains(self, original_selector: str) -> bool:
        return any(event.original_selector == original_selector for event in self.read_events())
