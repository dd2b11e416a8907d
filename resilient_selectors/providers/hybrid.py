from __future__ import annotations

import logging

from resilient_selectors.core.candidates import CandidateIndex
from resilient_selectors.llm.prompts import DEFAULT_SNAPSHOT_MAX_CHARS
from resilient_selectors.providers.base import HealingProvider
from resilient_selectors.providers.remote import RemoteHealingProvider
from resilient_selectors.providers.rule_based import RuleBasedHealingProvider
from resilient_selectors.utils.plausibility import leading_class_token, selector_shape

log = logging.getLogger(__name__)


class HybridHealingProvider(HealingProvider):
    """Chains cataloged alternatives, an optional remote model, and generic rewrites.

    Known renames resolve from the candidate index without a network call. The
    remote tier only runs for selectors the index does not know about.
    """

    provider_name = "hybrid"

    def __init__(
        self,
        candidate_index: CandidateIndex,
        remote: RemoteHealingProvider | None = None,
        max_markup_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS,
    ) -> None:
        super().__init__(max_markup_chars)
        self.rule_based = RuleBasedHealingProvider(candidate_index, max_markup_chars)
        self.remote = remote

    def propose(self, failed_selector: str, snapshot: str) -> str | None:
        suggestion = self.rule_based.propose(failed_selector, snapshot)
        if suggestion is not None:
            return suggestion
        if self.remote is not None:
            return self.remote.propose(failed_selector, snapshot)
        fallback = generic_fallback(failed_selector)
        log.debug("Generic fallback for %s: %s", failed_selector, fallback)
        return fallback


def generic_fallback(failed_selector: str) -> str:
    """Rewrites a selector by shape; unknown shapes come back unchanged."""

    shape = selector_shape(failed_selector)
    if shape == "id":
        return f'[data-testid="{failed_selector[1:]}"]'
    if shape == "class":
        return f'[class*="{leading_class_token(failed_selector)}"]'
    return failed_selector
