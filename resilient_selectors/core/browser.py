from __future__ import annotations

import logging

from selenium import webdriver
from selenium.webdriver import ChromeOptions, FirefoxOptions

from resilient_selectors.config.schema import BrowserSettings
from resilient_selectors.core.driver import SeleniumDriver
from resilient_selectors.core.exceptions import ConfigurationError

log = logging.getLogger(__name__)


def _chrome(headless: bool):
    options = ChromeOptions()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument("--window-size=1440,1200")
    return webdriver.Chrome(options=options)


def _firefox(headless: bool):
    options = FirefoxOptions()
    if headless:
        options.add_argument("-headless")
    return webdriver.Firefox(options=options)


LAUNCHERS = {"chrome": _chrome, "firefox": _firefox}


class BrowserSession:
    """Launches a browser through Selenium Manager and wraps it for healing."""

    def __init__(self, settings: BrowserSettings) -> None:
        self.settings = settings

    def start_driver(self, browser_name: str | None = None) -> SeleniumDriver:
        name = (browser_name or self.settings.browser).lower()
        launcher = LAUNCHERS.get(name)
        if launcher is None:
            raise ConfigurationError(f"Unsupported browser: {name}")
        raw = launcher(self.settings.headless)
        raw.set_page_load_timeout(self.settings.page_load_timeout_seconds)
        raw.implicitly_wait(0)
        log.info("Started %s (headless: %s)", name, self.settings.headless)
        return SeleniumDriver(raw)
