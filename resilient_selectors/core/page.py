from __future__ import annotations

from typing import Any

from resilient_selectors.config.schema import SessionConfig
from resilient_selectors.core.candidates import CandidateIndex
from resilient_selectors.core.driver import DocumentDriver
from resilient_selectors.core.events import HealingEvent, HealingEventLog
from resilient_selectors.core.orchestrator import HealingOrchestrator
from resilient_selectors.logging.artifacts import ArtifactManager
from resilient_selectors.logging.audit import HealingAuditLogger
from resilient_selectors.providers.base import HealingProvider
from resilient_selectors.providers.factory import create_healing_provider


class ResilientPage:
    """Self-healing wrapper around a document driver for one test session.

    The provider is built in the constructor so configuration errors surface
    before any test step runs. ``provider`` overrides the configured one.
    When ``artifacts_root`` is configured, healed selectors and markup
    snapshots are written beneath it unless loggers are passed explicitly.
    """

    def __init__(
        self,
        driver: DocumentDriver,
        config: SessionConfig | None = None,
        *,
        provider: HealingProvider | None = None,
        candidate_index: CandidateIndex | None = None,
        audit_logger: HealingAuditLogger | None = None,
        artifact_manager: ArtifactManager | None = None,
    ) -> None:
        self.driver = driver
        self.config = config or SessionConfig()
        self.provider = provider
        if self.provider is None and self.config.healing_enabled:
            self.provider = create_healing_provider(
                self.config.provider,
                candidate_index=candidate_index,
                max_markup_chars=self.config.healing.snapshot_max_chars,
            )
        if self.config.artifacts_root is not None:
            audit_logger = audit_logger or HealingAuditLogger(self.config.artifacts_root)
            artifact_manager = artifact_manager or ArtifactManager(self.config.artifacts_root)
        self.event_log = HealingEventLog(sink=audit_logger)
        self.orchestrator = HealingOrchestrator(
            driver,
            self.provider,
            self.event_log,
            settings=self.config.healing,
            artifact_manager=artifact_manager,
        )

    @property
    def healing_events(self) -> tuple[HealingEvent, ...]:
        return self.event_log.events

    def click(self, selector: str, options: dict[str, Any] | None = None) -> None:
        self._run(selector, "click", options=options)

    def fill(self, selector: str, value: str, options: dict[str, Any] | None = None) -> None:
        self._run(selector, "fill", value, options=options)

    def text_content(self, selector: str) -> str | None:
        return self._run(selector, "textContent")

    def inner_text(self, selector: str) -> str:
        return self._run(selector, "innerText")

    def input_value(self, selector: str) -> str:
        return self._run(selector, "inputValue")

    def is_visible(self, selector: str) -> bool:
        return self._run(selector, "isVisible")

    def goto(self, url: str) -> None:
        self.driver.navigate(url)

    def locator(self, selector: str):
        """Resolves ``selector`` directly, without healing."""

        return self.driver.resolve(selector, self.config.healing.locator_timeout_seconds)

    def _run(self, selector: str, action: str, *args: Any, options: dict[str, Any] | None = None):
        return self.orchestrator.execute(
            selector,
            action,
            lambda handle: self.driver.perform(handle, action, *args, **(options or {})),
        )
