"""Shared fixtures."""

import pytest

import uicraft.config


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the global config at a temp file and clear key env vars."""
    config_file = tmp_path / "config.yaml"
    monkeypatch.setattr(uicraft.config, "GLOBAL_CONFIG_FILE", config_file)
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "UICRAFT_MODEL"):
        monkeypatch.delenv(name, raising=False)
    return config_file
