from __future__ import annotations

from resilient_selectors.core.exceptions import EmptySuggestionError


def infer_selector_type(selector: str) -> str:
    stripped = selector.strip()
    if stripped.startswith("/") or stripped.startswith("("):
        return "xpath"
    return "css"


def parse_selector_response(response: str | None, source: str) -> str:
    """Takes a model reply verbatim as the selector, trimmed of whitespace."""

    selector = (response or "").strip()
    if not selector:
        raise EmptySuggestionError(f"{source} returned empty response")
    return selector
