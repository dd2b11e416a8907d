from __future__ import annotations

import json
from pathlib import Path

from resilient_selectors.config.schema import SessionConfig


class ConfigLoader:
    """Loads and validates the JSON healing session configuration."""

    @staticmethod
    def load(path: str | Path) -> SessionConfig:
        config_path = Path(path)
        with config_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        return SessionConfig.model_validate(payload)
