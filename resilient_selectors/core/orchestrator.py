from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, TypeVar

from resilient_selectors.config.schema import HealingSettings
from resilient_selectors.core.driver import DocumentDriver
from resilient_selectors.core.events import HealingEvent, HealingEventLog
from resilient_selectors.core.exceptions import HealingDisabledError, HealingExhausted, ProviderError
from resilient_selectors.logging.artifacts import ArtifactManager
from resilient_selectors.providers.base import HealingProvider

log = logging.getLogger(__name__)

T = TypeVar("T")


class HealingState(str, Enum):
    DIRECT = "direct"
    HEALING = "healing"
    HEALED = "healed"
    FAILED = "failed"


@dataclass(slots=True)
class HealingRun:
    """Tracks one action invocation through the healing state machine.

    ``candidate`` is the selector the next suggestion is seeded with: the
    original selector on the first healing attempt, then the suggestion that
    failed most recently.
    """

    selector: str
    action: str
    state: HealingState = HealingState.DIRECT
    attempt: int = 0
    candidate: str = ""
    last_error: BaseException | None = None
    history: list[tuple[HealingState, int, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.candidate = self.candidate or self.selector
        self._record()

    def begin_healing(self) -> None:
        self._move(HealingState.HEALING, 0, self.selector)

    def retry_with(self, failed_suggestion: str) -> None:
        self._move(HealingState.HEALING, self.attempt + 1, failed_suggestion)

    def heal(self, selector: str) -> None:
        self._move(HealingState.HEALED, self.attempt, selector)

    def fail(self) -> None:
        self._move(HealingState.FAILED, self.attempt, self.candidate)

    def _move(self, state: HealingState, attempt: int, candidate: str) -> None:
        self.state = state
        self.attempt = attempt
        self.candidate = candidate
        self._record()

    def _record(self) -> None:
        self.history.append((self.state, self.attempt, self.candidate))


class HealingOrchestrator:
    """Drives the bounded retry protocol for a single session."""

    def __init__(
        self,
        driver: DocumentDriver,
        provider: HealingProvider | None,
        event_log: HealingEventLog,
        settings: HealingSettings | None = None,
        artifact_manager: ArtifactManager | None = None,
    ) -> None:
        self.driver = driver
        self.provider = provider
        self.event_log = event_log
        self.settings = settings or HealingSettings()
        self.artifact_manager = artifact_manager
        self.last_run: HealingRun | None = None

    def execute(self, selector: str, action: str, operation: Callable[[Any], T]) -> T:
        run = HealingRun(selector=selector, action=action)
        self.last_run = run
        try:
            result = self._attempt(selector, operation)
        except Exception as exc:  # noqa: BLE001
            run.last_error = exc
        else:
            run.heal(selector)
            return result

        if self.provider is None:
            run.fail()
            raise HealingDisabledError(selector) from run.last_error

        run.begin_healing()
        log.info("Selector %s failed for %s; healing with %s", selector, action, self.provider.provider_name)
        while True:
            markup = self.driver.current_markup()
            if self.artifact_manager is not None:
                self.artifact_manager.write_markup_snapshot(run.candidate, markup)
            try:
                suggestion = self.provider.suggest(run.candidate, markup)
            except Exception as exc:
                run.last_error = exc
                run.fail()
                raise
            if suggestion is None:
                run.last_error = ProviderError(
                    f'{self.provider.provider_name} had no suggestion for "{run.candidate}"'
                )
            else:
                try:
                    result = self._attempt(suggestion, operation)
                except Exception as exc:  # noqa: BLE001
                    run.last_error = exc
                    log.info("Suggested selector %s failed: %s", suggestion, exc)
                else:
                    run.heal(suggestion)
                    self.event_log.append(
                        HealingEvent.now(
                            original_selector=selector,
                            healed_selector=suggestion,
                            action=action,
                            provider_name=self.provider.provider_name,
                        )
                    )
                    log.info("Healed %s -> %s (%s)", selector, suggestion, action)
                    return result

            if run.attempt + 1 >= self.settings.max_healing_retries:
                run.fail()
                log.warning("Healing exhausted for %s after %s attempt(s)", selector, self.settings.max_healing_retries)
                raise HealingExhausted(selector, self.settings.max_healing_retries, run.last_error) from run.last_error
            run.retry_with(suggestion if suggestion is not None else run.candidate)

    def _attempt(self, selector: str, operation: Callable[[Any], T]) -> T:
        handle = self.driver.resolve(selector, self.settings.locator_timeout_seconds)
        return operation(handle)
