from __future__ import annotations

import logging

from resilient_selectors.config.schema import (
    CustomProviderConfig,
    HybridProviderConfig,
    ProviderConfig,
    RemoteProviderConfig,
    RuleBasedProviderConfig,
)
from resilient_selectors.core.candidates import CandidateIndex
from resilient_selectors.core.exceptions import ConfigurationError
from resilient_selectors.llm.client import create_selector_client, resolve_api_key
from resilient_selectors.llm.prompts import DEFAULT_SNAPSHOT_MAX_CHARS
from resilient_selectors.providers.base import HealingProvider
from resilient_selectors.providers.custom import CustomHealingProvider
from resilient_selectors.providers.hybrid import HybridHealingProvider
from resilient_selectors.providers.remote import RemoteHealingProvider
from resilient_selectors.providers.rule_based import RuleBasedHealingProvider

log = logging.getLogger(__name__)

# Remote backends the hybrid provider probes, in order, when none is named.
HYBRID_REMOTE_PREFERENCE = ("anthropic", "openai")


def create_healing_provider(
    config: ProviderConfig | None,
    candidate_index: CandidateIndex | None = None,
    max_markup_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS,
) -> HealingProvider | None:
    """Builds the session's provider. Raises ``ConfigurationError`` eagerly."""

    if config is None:
        return None
    if isinstance(config, RuleBasedProviderConfig):
        return RuleBasedHealingProvider(_require_index(candidate_index, config.kind), max_markup_chars)
    if isinstance(config, RemoteProviderConfig):
        client = create_selector_client(
            config.provider,
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.request_timeout_seconds,
        )
        return RemoteHealingProvider(client, max_markup_chars)
    if isinstance(config, CustomProviderConfig):
        return CustomHealingProvider(config.heal_fn, max_markup_chars)
    if isinstance(config, HybridProviderConfig):
        index = _require_index(candidate_index, config.kind)
        return HybridHealingProvider(index, _hybrid_remote(config, max_markup_chars), max_markup_chars)
    raise ConfigurationError(f"Unsupported provider config: {type(config).__name__}")


def _require_index(candidate_index: CandidateIndex | None, kind: str) -> CandidateIndex:
    if candidate_index is None:
        raise ConfigurationError(f'A candidate index is required when provider kind is "{kind}"')
    return candidate_index


def _hybrid_remote(config: HybridProviderConfig, max_markup_chars: int) -> RemoteHealingProvider | None:
    names = (config.remote_provider,) if config.remote_provider else HYBRID_REMOTE_PREFERENCE
    for name in names:
        if resolve_api_key(name, config.api_key):
            client = create_selector_client(
                name,
                api_key=config.api_key,
                model=config.model,
                base_url=config.base_url,
                timeout=config.request_timeout_seconds,
            )
            return RemoteHealingProvider(client, max_markup_chars)
    log.info("No remote credential configured; hybrid healing uses cataloged and generic fallbacks only")
    return None
