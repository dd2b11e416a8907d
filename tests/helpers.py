from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from resilient_selectors.core.candidates import CandidateIndex
from resilient_selectors.core.exceptions import ResolutionTimeout
from resilient_selectors.providers.base import HealingProvider

# Shaped like an application's selector catalog: groups of known selectors per
# logical element, newest first, mixed with leaves that are not groups.
TRAVEL_SELECTORS = {
    "BASE_URL": "https://travel.example.com",
    "loginModal": {
        "overlay": [".modal-dialog", "#login-modal", '[data-cy="loginModal"]'],
        "closeBtn": [".overlayCrossIcon", "span.commonModal__close", '[data-cy="closeModal"]'],
    },
    "flights": {
        "fromCity": ["#fromCity", "#hp-widget__sfrom"],
        "toCity": ["#toCity", "#hp-widget__sTo", 'input[placeholder="To"]'],
        "searchBtn": ['[data-cy="submit"]', "#flights_submit", "a.primaryBtn"],
        "datePicker": {
            "day": lambda day: [f'[aria-label*="{day}"]'],
        },
    },
    "hotels": {
        "city": ["#city", '[data-cy="hotelCity"]'],
    },
}

TRAVEL_INDEX = CandidateIndex.build(TRAVEL_SELECTORS)

HOME_MARKUP = """
<html><body>
  <div class="modal-dialog"><span class="commonModal__close">x</span></div>
  <input id="fromCity" value="Delhi">
  <input id='toCity' value="Mumbai">
  <a class="primaryBtn" data-cy="submit">Search</a>
</body></html>
"""


@dataclass(slots=True)
class FakeElement:
    selector: str
    text: str = ""
    value: str = ""
    visible: bool = True
    clicks: int = 0
    fail_action: Exception | None = None

    def raise_if_broken(self) -> None:
        if self.fail_action is not None:
            raise self.fail_action


@dataclass
class FakeDriver:
    """In-memory document driver; only selectors in ``elements`` resolve."""

    elements: dict[str, FakeElement] = field(default_factory=dict)
    markup: str = HOME_MARKUP
    url: str = "about:blank"
    resolved: list[tuple[str, float]] = field(default_factory=list)
    performed: list[tuple[str, str, tuple, dict]] = field(default_factory=list)
    markup_pulls: int = 0

    @classmethod
    def with_elements(cls, *selectors: str, **kwargs: Any) -> FakeDriver:
        return cls(elements={selector: FakeElement(selector) for selector in selectors}, **kwargs)

    def resolve(self, selector: str, timeout: float) -> FakeElement:
        self.resolved.append((selector, timeout))
        element = self.elements.get(selector)
        if element is None:
            raise ResolutionTimeout(selector, timeout)
        return element

    def perform(self, handle: FakeElement, action: str, *args: Any, **options: Any) -> Any:
        self.performed.append((handle.selector, action, args, options))
        handle.raise_if_broken()
        if action == "click":
            handle.clicks += 1
            return None
        if action == "fill":
            (handle.value,) = args
            return None
        if action == "textContent":
            return handle.text
        if action == "innerText":
            return handle.text
        if action == "inputValue":
            return handle.value
        if action == "isVisible":
            return handle.visible
        raise ValueError(f"Unsupported action: {action}")

    def current_markup(self) -> str:
        self.markup_pulls += 1
        return self.markup

    def navigate(self, url: str) -> None:
        self.url = url


class ScriptedProvider(HealingProvider):
    """Returns queued suggestions in order and records what it was asked."""

    provider_name = "scripted"

    def __init__(self, *suggestions: str | None, max_markup_chars: int = 12_000) -> None:
        super().__init__(max_markup_chars)
        self.suggestions = list(suggestions)
        self.calls: list[tuple[str, str]] = []

    def propose(self, failed_selector: str, snapshot: str) -> str | None:
        self.calls.append((failed_selector, snapshot))
        return self.suggestions.pop(0)


class FakeHTTPResponse:
    def __init__(self, payload: Any) -> None:
        self._raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> FakeHTTPResponse:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


class RecordingOpener:
    """Stands in for ``urllib.request.urlopen`` and captures requests."""

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.requests: list[Any] = []
        self.timeouts: list[float] = []

    def __call__(self, req, timeout: float = 0):
        self.requests.append(req)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return FakeHTTPResponse(self.payload)

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].data.decode("utf-8"))

    @property
    def last_headers(self) -> dict[str, str]:
        return {key.lower(): value for key, value in self.requests[-1].header_items()}
