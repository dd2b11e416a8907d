from __future__ import annotations

import logging

from resilient_selectors.core.candidates import CandidateIndex
from resilient_selectors.llm.prompts import DEFAULT_SNAPSHOT_MAX_CHARS
from resilient_selectors.providers.base import HealingProvider
from resilient_selectors.utils.plausibility import is_plausible

log = logging.getLogger(__name__)


class RuleBasedHealingProvider(HealingProvider):
    """Suggests known alternatives from a candidate index. No network access."""

    provider_name = "rule-based"

    def __init__(self, candidate_index: CandidateIndex, max_markup_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS) -> None:
        super().__init__(max_markup_chars)
        self.candidate_index = candidate_index

    def propose(self, failed_selector: str, snapshot: str) -> str | None:
        group = self.candidate_index.lookup(failed_selector)
        if group is None:
            return None
        alternatives = [candidate for candidate in group if candidate != failed_selector]
        for candidate in alternatives:
            if is_plausible(candidate, snapshot):
                log.debug("Plausible alternative for %s: %s", failed_selector, candidate)
                return candidate
        if alternatives:
            # Unverified guess; the orchestrator's retry bound catches a miss.
            log.debug("No plausible alternative for %s, guessing %s", failed_selector, alternatives[0])
            return alternatives[0]
        return None
