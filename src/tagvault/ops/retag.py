"""Retag — derive each document's primary tag from its location.

Tag derivation: strip the tag root from the document path, drop the filename,
join the remaining components with "/":

    <tag_root>/proj/client/note.md  →  proj/client
    <tag_root>/note.md              →  (no tag — left untouched)

When the embedded primary tag differs, the marker line is rewritten (or
inserted at the top). With alias preservation on, the old tag is appended to
the frontmatter ``aliases`` list as ``"<date> <old-tag>"``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from tagvault.config import VaultConfig
from tagvault.ops.base import (
    ITEM_ERRORS,
    BatchReport,
    ItemResult,
    ItemStatus,
    OutsideTagRootError,
    TargetNotFoundError,
)
from tagvault.tags.path import TagPath
from tagvault.tags.scanner import extract_primary_tag, replace_primary_tag
from tagvault.vault.document import Document
from tagvault.vault.walker import VaultWalker
from tagvault.vault.writer import create_backup, write_text_atomic

OnItem = Callable[[ItemResult], None]


def derive_tag(tag_root: Path, path: Path) -> TagPath | None:
    """Location tag for the document at *path*; None directly under the tag root.

    Raises:
        OutsideTagRootError: If *path* is not below *tag_root*.
    """
    root = tag_root.resolve()
    resolved = path.resolve()
    try:
        relative = resolved.relative_to(root)
    except ValueError:
        raise OutsideTagRootError(
            f"{path} is not inside the tag root ({tag_root})"
        ) from None
    parts = relative.parent.parts
    return TagPath.from_parts(parts) if parts else None


def retag_document(
    cfg: VaultConfig,
    path: Path,
    *,
    backup: bool = True,
    keep_alias: bool = True,
    now: datetime | None = None,
) -> ItemResult:
    """Bring one document's primary tag in line with its location.

    Raises:
        OutsideTagRootError, FrontmatterError, OSError: propagated to the caller.
    """
    new_tag = derive_tag(cfg.tag_root_path, path)
    if new_tag is None:
        return ItemResult(path, ItemStatus.SKIPPED, "directly under tag root")

    doc = Document.read(path)
    old_tag = extract_primary_tag(doc.body)
    if old_tag is not None and str(old_tag) == str(new_tag):
        return ItemResult(path, ItemStatus.SKIPPED, f"already tagged {new_tag}")

    now = now or datetime.now()
    if keep_alias and old_tag is not None:
        doc.append_alias(f"{now.strftime(cfg.date_format)} {old_tag}")
    doc.body = replace_primary_tag(doc.body, new_tag)

    if backup:
        create_backup(path, cfg.backups_path, now)
    write_text_atomic(path, doc.render())

    detail = f"{old_tag} → {new_tag}" if old_tag is not None else f"tagged {new_tag}"
    return ItemResult(path, ItemStatus.CHANGED, detail)


def retag(
    cfg: VaultConfig,
    target: Path,
    *,
    backup: bool = True,
    keep_alias: bool = True,
    now: datetime | None = None,
    on_item: OnItem | None = None,
) -> BatchReport:
    """Retag a single document or every document below a directory.

    Per-document failures are recorded as ERROR items; the batch continues.

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
            result = retag_document(cfg, path, backup=backup, keep_alias=keep_alias, now=now)
        except ITEM_ERRORS as exc:
            result = ItemResult(path, ItemStatus.ERROR, str(exc))
        report.add(result)
        if on_item is not None:
            on_item(result)
    return report
