"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from tagvault.config import VaultConfig


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep the user's real config and environment out of every test."""
    monkeypatch.delenv("TAGVAULT_VAULT", raising=False)
    monkeypatch.delenv("TAGVAULT_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def vault(tmp_path) -> Path:
    """Vault skeleton: Notas/ (tag root + notes dir) and Templates/."""
    root = tmp_path / "vault"
    (root / "Notas").mkdir(parents=True)
    (root / "Templates").mkdir()
    return root


@pytest.fixture
def cfg(vault, tmp_path) -> VaultConfig:
    return VaultConfig(vault=vault, cache_dir=tmp_path / "cache")


@pytest.fixture
def write_doc():
    """Write a document (creating parents) and return its path."""

    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_file(tmp_path, vault):
    """Write a config YAML for CLI tests; extra keys override the defaults."""

    def _make(**extra) -> Path:
        data = {"vault": str(vault), "cache_dir": str(tmp_path / "cache")}
        data.update(extra)
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(data), encoding="utf-8")
        return path

    return _make
