from __future__ import annotations

from pathlib import Path

import pytest

from resilient_selectors.config.loader import ConfigLoader
from resilient_selectors.logging.artifacts import ArtifactManager


@pytest.fixture(scope="session", autouse=True)
def reset_artifacts_for_test_run():
    artifacts_root = Path(__file__).resolve().parents[1] / "artifacts"
    manager = ArtifactManager(artifacts_root)
    manager.reset()
    return manager


@pytest.fixture()
def session_config():
    config_path = Path(__file__).resolve().parents[1] / "config" / "healing.json"
    return ConfigLoader.load(config_path)


@pytest.fixture(autouse=True)
def clear_llm_environment(monkeypatch):
    for name in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_MODEL", "OPENAI_MODEL"):
        monkeypatch.delenv(name, raising=False)
