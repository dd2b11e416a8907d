from __future__ import annotations

DEFAULT_SNAPSHOT_MAX_CHARS = 12_000
TRUNCATION_MARKER = "\n<!-- ... truncated ... -->"


def truncate_markup(markup: str, max_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS) -> str:
    """Caps a markup snapshot, marking it as partial when shortened."""

    if len(markup) <= max_chars:
        return markup
    return markup[:max_chars] + TRUNCATION_MARKER


def build_prompt(failed_selector: str, snapshot: str) -> str:
    return "\n".join(
        [
            "You are an expert at writing browser automation selectors.",
            "A test tried to locate an element with the following selector, but it timed out:",
            "",
            f"  Failed selector: {failed_selector}",
            "",
            "Below is a simplified snapshot of the current page HTML.",
            "Suggest the single best replacement CSS or XPath selector that targets the same intended element.",
            "Reply with ONLY the selector string: no explanation, no quotes, no markdown.",
            "",
            "--- HTML SNAPSHOT ---",
            snapshot,
        ]
    )
