from __future__ import annotations

from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, Field, field_validator

HealFunction = Callable[[str, str], Any]


class HealingSettings(BaseModel):
    locator_timeout_seconds: float = Field(default=5.0, gt=0)
    max_healing_retries: int = Field(default=1, ge=1)
    snapshot_max_chars: int = Field(default=12_000, gt=0)


class BrowserSettings(BaseModel):
    browser: str = "chrome"
    headless: bool = True
    page_load_timeout_seconds: int = 30

    @field_validator("browser")
    @classmethod
    def validate_browser(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in {"chrome", "firefox"}:
            raise ValueError(f"Unsupported browser: {value}")
        return normalized


class RuleBasedProviderConfig(BaseModel):
    kind: Literal["rule_based"] = "rule_based"


class RemoteProviderConfig(BaseModel):
    kind: Literal["remote"] = "remote"
    provider: Literal["anthropic", "openai"]
    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None
    request_timeout_seconds: float = Field(default=30.0, gt=0)


class CustomProviderConfig(BaseModel):
    """Wraps a caller-supplied heal function; not loadable from JSON."""

    kind: Literal["custom"] = "custom"
    heal_fn: HealFunction | None = None


class HybridProviderConfig(BaseModel):
    kind: Literal["hybrid"] = "hybrid"
    remote_provider: Literal["anthropic", "openai"] | None = None
    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None
    request_timeout_seconds: float = Field(default=30.0, gt=0)


ProviderConfig = Annotated[
    Union[RuleBasedProviderConfig, RemoteProviderConfig, CustomProviderConfig, HybridProviderConfig],
    Field(discriminator="kind"),
]


class SessionConfig(BaseModel):
    healing: HealingSettings = Field(default_factory=HealingSettings)
    provider: ProviderConfig | None = None
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    artifacts_root: str | None = None

    @property
    def healing_enabled(self) -> bool:
        return self.provider is not None
