"""Persisted tag caches.

Two independent JSON artifacts in ``cache_dir``:

  tags_cache.json          {version, timestamp, root}
                           tree of every secondary tag in the vault
  primary_tags_cache.json  {version, timestamp, root, dirs_by_tag}
                           tree of primary tags + tag → vault-relative dirs

Both are read accelerators only. ``load_*`` returns the persisted artifact when
it exists, parses and carries the current format version; otherwise it scans,
persists and returns. ``update_*`` always rescans and overwrites. The timestamp
is informational — staleness is never checked.
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tagvault.tags.scanner import ScanItem, scan_vault
from tagvault.tags.tree import TagNode
from tagvault.vault.writer import write_text_atomic

CACHE_VERSION = 1
TAGS_CACHE_NAME = "tags_cache.json"
PRIMARY_CACHE_NAME = "primary_tags_cache.json"


@dataclass
class PrimaryTagIndex:
    root: TagNode = field(default_factory=TagNode)
    dirs_by_tag: dict[str, list[str]] = field(default_factory=dict)

    def ambiguous(self) -> dict[str, list[str]]:
        """Tags whose documents live in more than one directory."""
        return {tag: dirs for tag, dirs in self.dirs_by_tag.items() if len(dirs) > 1}


# ------------------------------------------------------------------
# Collection (pure functions over scan results)
# ------------------------------------------------------------------


def collect_tag_tree(items: Iterable[ScanItem]) -> TagNode:
    root = TagNode()
    for item in items:
        for tag in item.secondary_tags:
            root.insert(tag)
    return root


def collect_primary_index(items: Iterable[ScanItem], vault: Path) -> PrimaryTagIndex:
    root = TagNode()
    dirs: dict[str, set[str]] = {}
    for item in items:
        if item.primary_tag is None:
            continue
        root.insert(item.primary_tag)
        parent = item.path.parent
        try:
            rel = parent.relative_to(vault).as_posix()
        except ValueError:
            rel = parent.as_posix()
        if rel == ".":
            rel = ""
        dirs.setdefault(str(item.primary_tag), set()).add(rel)
    return PrimaryTagIndex(
        root=root,
        dirs_by_tag={tag: sorted(d) for tag, d in sorted(dirs.items())},
    )


# ------------------------------------------------------------------
# Cache service
# ------------------------------------------------------------------


class TagCache:
    """Cache files for one vault, stored under *cache_dir*."""

    def __init__(self, cache_dir: Path, vault: Path, templates_path: Path | None = None) -> None:
        self.cache_dir = cache_dir
        self.vault = vault
        self.templates_path = templates_path

    @property
    def tags_path(self) -> Path:
        return self.cache_dir / TAGS_CACHE_NAME

    @property
    def primary_path(self) -> Path:
        return self.cache_dir / PRIMARY_CACHE_NAME

    def scan(self) -> list[ScanItem]:
        return scan_vault(self.vault, self.templates_path)

    # ---- full tag tree ----

    def load(self) -> TagNode:
        data = self._read(self.tags_path)
        if data is not None:
            try:
                return TagNode.from_dict(data["root"])
            except (KeyError, ValueError):
                pass
        return self.update()

    def update(self, items: list[ScanItem] | None = None) -> TagNode:
        root = collect_tag_tree(items if items is not None else self.scan())
        self._write(self.tags_path, {"root": root.to_dict()})
        return root

    # ---- primary tags + dirs ----

    def load_primary(self) -> PrimaryTagIndex:
        data = self._read(self.primary_path)
        if data is not None:
            try:
                return PrimaryTagIndex(
                    root=TagNode.from_dict(data["root"]),
                    dirs_by_tag={
                        str(k): [str(d) for d in v] for k, v in data["dirs_by_tag"].items()
                    },
                )
            except (KeyError, ValueError, AttributeError, TypeError):
                pass
        return self.update_primary()

    def update_primary(self, items: list[ScanItem] | None = None) -> PrimaryTagIndex:
        index = collect_primary_index(items if items is not None else self.scan(), self.vault)
        self._write(
            self.primary_path,
            {"root": index.root.to_dict(), "dirs_by_tag": index.dirs_by_tag},
        )
        return index

    def update_all(self) -> tuple[TagNode, PrimaryTagIndex]:
        """Rebuild both caches from a single scan."""
        items = self.scan()
        return self.update(items), self.update_primary(items)

    def clear(self) -> None:
        for path in (self.tags_path, self.primary_path):
            path.unlink(missing_ok=True)

    # ---- file helpers ----

    @staticmethod
    def _read(path: Path) -> dict[str, Any] | None:
        """Parsed cache payload, or None when missing, unreadable or outdated."""
        if not path.is_file():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        if not isinstance(data, dict) or data.get("version") != CACHE_VERSION:
            return None
        return data

    @staticmethod
    def _write(path: Path, payload: dict[str, Any]) -> None:
        document = {"version": CACHE_VERSION, "timestamp": int(time.time()), **payload}
        write_text_atomic(path, json.dumps(document, indent=2, ensure_ascii=False) + "\n")
