"""Redir — move each document to the directory implied by its tag.

Tag selection: the primary tag wins; otherwise the frontmatter tags are used.
With several frontmatter tags and no primary tag, a *choose* callback picks
one; a missing callback or a None answer skips the document.

Destination: ``<notes_dir>/<tag segments...>/<filename>``. An existing file at
the destination is a collision — never overwritten, never renamed around.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from tagvault.config import VaultConfig
from tagvault.ops.base import (
    ITEM_ERRORS,
    BatchReport,
    CollisionError,
    ItemResult,
    ItemStatus,
    TargetNotFoundError,
)
from tagvault.ops.retag import OnItem
from tagvault.tags.path import TagPath
from tagvault.tags.scanner import extract_primary_tag, frontmatter_tags
from tagvault.vault.document import Document
from tagvault.vault.walker import VaultWalker
from tagvault.vault.writer import create_backup

TagChooser = Callable[[Path, list[TagPath]], TagPath | None]


def destination_dir(cfg: VaultConfig, tag: TagPath) -> Path:
    return cfg.notes_path.joinpath(*tag.segments)


def select_tag(doc: Document, path: Path, choose: TagChooser | None = None) -> TagPath | None:
    """Tag that decides *path*'s location, or None if there is none (or the choice is declined)."""
    primary = extract_primary_tag(doc.body)
    if primary is not None:
        return primary

    candidates = frontmatter_tags(doc.metadata)
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]
    if choose is None:
        return None
    return choose(path, candidates)


def redir_document(
    cfg: VaultConfig,
    path: Path,
    *,
    backup: bool = True,
    choose: TagChooser | None = None,
    now: datetime | None = None,
) -> ItemResult:
    """Move one document under the notes directory according to its tag.

    Raises:
        CollisionError: If a file already exists at the destination.
        FrontmatterError, OSError: propagated to the caller.
    """
    doc = Document.read(path)
    tag = select_tag(doc, path, choose)
    if tag is None:
        return ItemResult(path, ItemStatus.SKIPPED, "no tag selected")

    dest_dir = destination_dir(cfg, tag)
    if path.parent.resolve() == dest_dir.resolve():
        return ItemResult(path, ItemStatus.SKIPPED, "already in place")

    dest = dest_dir / path.name
    if dest.exists():
        raise CollisionError(f"Destination already exists: {dest}")

    if backup:
        create_backup(path, cfg.backups_path, now)
    dest_dir.mkdir(parents=True, exist_ok=True)
    path.rename(dest)

    return ItemResult(path, ItemStatus.CHANGED, str(tag), destination=dest)


def redir(
    cfg: VaultConfig,
    target: Path,
    *,
    backup: bool = True,
    choose: TagChooser | None = None,
    now: datetime | None = None,
    on_item: OnItem | None = None,
) -> BatchReport:
    """Redir a single document or every document below a directory.

    Document paths are collected before the first move so the walk is not
    disturbed by files landing in directories still to be visited.

    Raises:
        TargetNotFoundError: If *target* does not exist.
    """
    if not target.exists():
        raise TargetNotFoundError(f"Target not found: {target}")

    if target.is_dir():
        paths = VaultWalker(target, templates_path=cfg.templates_path).paths()
    else:
        paths = [target]

    report = BatchReport()
    for path in paths:
        try:
            result = redir_document(cfg, path, backup=backup, choose=choose, now=now)
        except ITEM_ERRORS as exc:
            result = ItemResult(path, ItemStatus.ERROR, str(exc))
        report.add(result)
        if on_item is not None:
            on_item(result)
    return report
