from __future__ import annotations


class HealingError(RuntimeError):
    """Base class for selector healing failures."""


class ConfigurationError(HealingError):
    """Raised when a healing session cannot be constructed."""


class ResolutionTimeout(HealingError):
    """Raised when a selector does not resolve within its bounded wait."""

    def __init__(self, selector: str, timeout: float) -> None:
        super().__init__(f'Selector "{selector}" did not resolve within {timeout:g}s')
        self.selector = selector
        self.timeout = timeout


class ProviderError(HealingError):
    """Raised when a provider call fails or returns unusable content."""


class EmptySuggestionError(ProviderError):
    """Raised when a provider returns a blank selector."""


class HealingDisabledError(HealingError):
    def __init__(self, selector: str) -> None:
        super().__init__(f'Selector "{selector}" timed out and healing is disabled.')
        self.selector = selector


class HealingExhausted(HealingError):
    """Raised when every healing attempt for a selector has failed."""

    def __init__(self, selector: str, max_retries: int, last_error: BaseException | None) -> None:
        detail = str(last_error) if last_error is not None else "no attempt was made"
        super().__init__(
            f'Selector "{selector}" could not be healed after {max_retries} attempt(s). '
            f"Last error: {detail}"
        )
        self.selector = selector
        self.max_retries = max_retries
        self.last_error = last_error
