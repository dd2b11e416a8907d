from __future__ import annotations

import asyncio

from resilient_selectors.config.schema import HealFunction
from resilient_selectors.core.exceptions import ConfigurationError
from resilient_selectors.llm.prompts import DEFAULT_SNAPSHOT_MAX_CHARS
from resilient_selectors.providers.base import HealingProvider


class CustomHealingProvider(HealingProvider):
    """Delegates to a caller-supplied heal function.

    The function receives the failed selector and the capped snapshot. It may
    return the selector directly or a coroutine resolving to it.
    """

    provider_name = "custom"

    def __init__(self, heal_fn: HealFunction | None, max_markup_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS) -> None:
        if heal_fn is None:
            raise ConfigurationError('heal_fn is required when provider kind is "custom"')
        super().__init__(max_markup_chars)
        self.heal_fn = heal_fn

    def propose(self, failed_selector: str, snapshot: str) -> str | None:
        result = self.heal_fn(failed_selector, snapshot)
        if asyncio.iscoroutine(result):
            result = asyncio.run(result)
        return result
