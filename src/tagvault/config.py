"""tagvault configuration loader.

Priority (high → low):
  1. CLI flags              (handled at call site — not in this module)
  2. Environment variables  (TAGVAULT_VAULT; TAGVAULT_CONFIG selects the file)
  3. Config file            ($XDG_CONFIG_HOME/tagvault/config.yaml)
  4. Hardcoded defaults

All YAML reads use yaml.safe_load() — never yaml.load().
Directory names (tag_root, notes_dir, templates_dir, backup_dir) are relative
to the vault and may not escape it.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_APP_DIR_NAME: str = "tagvault"
_CONFIG_FILE_NAME: str = "config.yaml"

# Known top-level keys; anything else produces a warning
_KNOWN_KEYS: frozenset[str] = frozenset(
    [
        "vault",
        "tag_root",
        "notes_dir",
        "templates_dir",
        "date_format",
        "backup_dir",
        "cache_dir",
        "dir_mappings",
    ]
)

# Keys holding a vault-relative directory name
_VAULT_RELATIVE_KEYS: tuple[str, ...] = ("tag_root", "notes_dir", "templates_dir", "backup_dir")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file is missing a required value or holds an invalid one."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


def config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/tagvault`` (default ``~/.config/tagvault``)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / _APP_DIR_NAME


def default_config_path() -> Path:
    """Return the config file path, honouring ``$TAGVAULT_CONFIG``."""
    if override := os.environ.get("TAGVAULT_CONFIG"):
        return Path(override)
    return config_dir() / _CONFIG_FILE_NAME


@dataclass
class VaultConfig:
    """Root configuration object, built by load_config().

    Attributes:
        vault: Root directory of the vault.
        tag_root: Vault subdirectory whose relative paths become location tags.
        notes_dir: Vault subdirectory that redir moves documents into.
        templates_dir: Vault subdirectory excluded from every scan.
        date_format: strftime format used for alias entries.
        backup_dir: Vault subdirectory holding flat timestamped backups.
        cache_dir: Directory holding the tag cache files.
        dir_mappings: Work-tree prefix → documentation subpath (relative to tag_root).
    """

    vault: Path
    tag_root: str = "Notas"
    notes_dir: str = "Notas"
    templates_dir: str = "Templates"
    date_format: str = "%Y-%m-%d"
    backup_dir: str = ".arc/backups"
    cache_dir: Path = field(default_factory=config_dir)
    dir_mappings: dict[str, str] = field(default_factory=dict)

    @property
    def tag_root_path(self) -> Path:
        return self.vault / self.tag_root

    @property
    def notes_path(self) -> Path:
        return self.vault / self.notes_dir

    @property
    def templates_path(self) -> Path:
        return self.vault / self.templates_dir

    @property
    def backups_path(self) -> Path:
        return self.vault / self.backup_dir


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _validate_relative_dir(key: str, value: str, source: Path) -> None:
    """Raise ConfigError if *value* is absolute or climbs out of the vault."""
    p = PurePath(value)
    if not value.strip() or p.is_absolute() or ".." in p.parts:
        raise ConfigError(
            f"'{key}' in '{source}' must be a directory name inside the vault: '{value}'\n"
            f"  Example:  {key}: Notas"
        )


def _parse_mappings(raw: Any, source: Path) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"'dir_mappings' in '{source}' must be a mapping of work dir → doc subpath.\n"
            "  Example:\n"
            "    dir_mappings:\n"
            "      ~/Developer: dev"
        )
    mappings: dict[str, str] = {}
    for work, doc in raw.items():
        doc_str = str(doc).strip().strip("/")
        if not doc_str:
            raise ConfigError(f"dir_mappings entry '{work}' in '{source}' has an empty doc subpath.")
        mappings[str(Path(str(work)).expanduser())] = doc_str
    return mappings


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_KEYS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=3,
            )


def _cfg_from_dict(data: dict[str, Any], source: Path) -> VaultConfig:
    """Build a *VaultConfig* from a raw YAML dict."""
    vault = data.get("vault")
    if not vault:
        raise ConfigError(
            f"No 'vault' configured in '{source}'.\n"
            "  Add:  vault: ~/Documents/Vault\n"
            "  or set:  export TAGVAULT_VAULT=~/Documents/Vault"
        )

    cfg = VaultConfig(vault=Path(str(vault)).expanduser())

    for key in _VAULT_RELATIVE_KEYS:
        if key in data and data[key] is not None:
            value = str(data[key])
            _validate_relative_dir(key, value, source)
            setattr(cfg, key, value)

    if data.get("date_format"):
        cfg.date_format = str(data["date_format"])
    if data.get("cache_dir"):
        cfg.cache_dir = Path(str(data["cache_dir"])).expanduser()

    cfg.dir_mappings = _parse_mappings(data.get("dir_mappings"), source)
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: Path | None = None) -> VaultConfig:
    """Load and return a *VaultConfig*.

    Args:
        config_path: Config file to read. Defaults to ``default_config_path()``.

    Returns:
        Parsed config with environment overrides applied.

    Raises:
        ConfigError: If no vault is configured or a value is invalid.
    """
    path = config_path if config_path is not None else default_config_path()

    data: dict[str, Any] = {}
    if path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file '{path}' must contain a YAML mapping.")
        _warn_unknown_keys(raw, path)
        data = dict(raw)

    if vault := os.environ.get("TAGVAULT_VAULT"):
        data["vault"] = vault

    return _cfg_from_dict(data, path)


def ensure_config(config_path: Path | None = None) -> Path:
    """Create a starter config file if it does not exist.

    Creates the parent directory with mode 0o700 and the file with mode 0o600.

    Returns:
        Path to the config file.
    """
    target = config_path if config_path is not None else default_config_path()
    target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    if not target.exists():
        content = (
            "# tagvault configuration\n"
            "vault: ~/Documents/Vault\n"
            "tag_root: Notas\n"
            "notes_dir: Notas\n"
            "templates_dir: Templates\n"
            "date_format: \"%Y-%m-%d\"\n"
            "\n"
            "# Work directory → documentation subpath (relative to tag_root)\n"
            "dir_mappings: {}\n"
        )
        target.write_text(content, encoding="utf-8")
        target.chmod(0o600)

    return target
