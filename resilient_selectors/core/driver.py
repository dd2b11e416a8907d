from __future__ import annotations

from time import monotonic, sleep
from typing import Any, Protocol

from selenium.common.exceptions import InvalidSelectorException, StaleElementReferenceException
from selenium.webdriver.common.by import By

from resilient_selectors.core.exceptions import ResolutionTimeout
from resilient_selectors.llm.parser import infer_selector_type


class DocumentDriver(Protocol):
    """The automation driver operations the healing orchestrator relies on."""

    def resolve(self, selector: str, timeout: float) -> Any: ...

    def perform(self, handle: Any, action: str, *args: Any, **options: Any) -> Any: ...

    def current_markup(self) -> str: ...

    def navigate(self, url: str) -> None: ...


class SeleniumDriver:
    """Runs healing actions against a Selenium WebDriver."""

    def __init__(self, webdriver, poll_interval: float = 0.2) -> None:
        self.webdriver = webdriver
        self.poll_interval = poll_interval

    def resolve(self, selector: str, timeout: float):
        """Polls until ``selector`` matches an attached element."""

        by = self._by(selector)
        deadline = monotonic() + timeout
        while True:
            try:
                matches = self.webdriver.find_elements(by, selector)
            except InvalidSelectorException:
                matches = []
            if matches:
                return matches[0]
            remaining = deadline - monotonic()
            if remaining <= 0:
                raise ResolutionTimeout(selector, timeout)
            sleep(min(self.poll_interval, remaining))

    def perform(self, handle, action: str, *args, **options):
        if action == "click":
            if options.get("force"):
                self.webdriver.execute_script("arguments[0].click();", handle)
            else:
                handle.click()
            return None
        if action == "fill":
            (value,) = args
            if options.get("clear_first", True):
                handle.clear()
            handle.send_keys(value)
            return None
        if action == "textContent":
            return handle.get_attribute("textContent")
        if action == "innerText":
            return handle.text
        if action == "inputValue":
            return handle.get_attribute("value") or ""
        if action == "isVisible":
            try:
                return handle.is_displayed()
            except StaleElementReferenceException:
                return False
        raise ValueError(f"Unsupported action: {action}")

    def current_markup(self) -> str:
        return self.webdriver.page_source

    def navigate(self, url: str) -> None:
        self.webdriver.get(url)

    @staticmethod
    def _by(selector: str) -> str:
        return By.XPATH if infer_selector_type(selector) == "xpath" else By.CSS_SELECTOR
