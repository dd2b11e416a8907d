from __future__ import annotations

import logging

from resilient_selectors.llm.client import SelectorRepairClient
from resilient_selectors.llm.prompts import DEFAULT_SNAPSHOT_MAX_CHARS
from resilient_selectors.providers.base import HealingProvider

log = logging.getLogger(__name__)


class RemoteHealingProvider(HealingProvider):
    """Asks a hosted LLM for a replacement selector."""

    def __init__(self, client: SelectorRepairClient, max_markup_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS) -> None:
        super().__init__(max_markup_chars)
        self.client = client
        self.provider_name = client.provider_name

    def propose(self, failed_selector: str, snapshot: str) -> str:
        log.info("Requesting %s suggestion for %s", self.provider_name, failed_selector)
        return self.client.suggest_selector(failed_selector, snapshot)
