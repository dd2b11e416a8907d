from __future__ import annotations

from abc import ABC, abstractmethod

from resilient_selectors.llm.prompts import DEFAULT_SNAPSHOT_MAX_CHARS, truncate_markup


class HealingProvider(ABC):
    """Supplies a replacement for a selector that failed to resolve.

    ``suggest`` caps the markup snapshot before any strategy sees it, so
    implementations of ``propose`` never handle oversized snapshots.
    """

    provider_name = "unknown"

    def __init__(self, max_markup_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS) -> None:
        self.max_markup_chars = max_markup_chars

    def suggest(self, failed_selector: str, markup: str) -> str | None:
        return self.propose(failed_selector, truncate_markup(markup, self.max_markup_chars))

    @abstractmethod
    def propose(self, failed_selector: str, snapshot: str) -> str | None:
        raise NotImplementedError
