"""Rename — dual directory rename across the work and documentation trees.

A directory can be renamed from either side of a dir mapping:

  from a work dir   /work/proj      ↔  <tag_root>/<doc_subpath>/proj
  from a doc dir    <tag_root>/dev/proj  ↔  <work_prefix>/proj

Both directories get the same new leaf name (sibling rename). All checks run
before the first filesystem change: both sources must exist and neither
destination may exist. The mirror side is renamed first, then the current
side. If the second rename fails the first is undone when possible, and the
failure surfaces as CrossTreeRenameError either way.

Afterwards the new documentation directory is retagged (no backups, old tags
kept as aliases) so embedded tags follow the new name.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath

from tagvault.config import VaultConfig
from tagvault.ops.base import (
    BatchReport,
    CollisionError,
    CrossTreeRenameError,
    MappingNotFoundError,
    OutsideTagRootError,
    TargetNotFoundError,
    VaultOpError,
)
from tagvault.ops.mapping import DirMappingIndex
from tagvault.ops.retag import OnItem, retag


class Direction(enum.Enum):
    FROM_WORK = "work"
    FROM_DOCS = "docs"


@dataclass(frozen=True)
class RenamePlan:
    direction: Direction
    doc_dir: Path
    work_dir: Path
    new_name: str

    @property
    def old_name(self) -> str:
        return self.current_dir.name

    @property
    def current_dir(self) -> Path:
        return self.work_dir if self.direction is Direction.FROM_WORK else self.doc_dir

    @property
    def mirror_dir(self) -> Path:
        return self.doc_dir if self.direction is Direction.FROM_WORK else self.work_dir

    @property
    def new_doc_dir(self) -> Path:
        return self.doc_dir.with_name(self.new_name)

    @property
    def new_work_dir(self) -> Path:
        return self.work_dir.with_name(self.new_name)


@dataclass
class RenameResult:
    plan: RenamePlan
    retag_report: BatchReport | None = None


# ------------------------------------------------------------------
# Planning
# ------------------------------------------------------------------


def _validate_name(new_name: str) -> None:
    if not new_name.strip() or new_name in (".", "..") or "/" in new_name or "\\" in new_name:
        raise VaultOpError(f"Invalid directory name: '{new_name}'")


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


def plan_rename(
    cfg: VaultConfig,
    current_dir: Path,
    new_name: str,
    index: DirMappingIndex | None = None,
) -> RenamePlan:
    """Work out both sides of the rename and check every precondition.

    Raises:
        VaultOpError: Invalid new name.
        OutsideTagRootError: Inside the vault but outside the tag root.
        MappingNotFoundError: No dir mapping covers *current_dir*.
        TargetNotFoundError: The mirror directory does not exist.
        CollisionError: A destination directory already exists.
    """
    _validate_name(new_name)
    if not current_dir.is_dir():
        raise TargetNotFoundError(f"Directory not found: {current_dir}")

    index = index if index is not None else DirMappingIndex.build(cfg.dir_mappings)
    if not len(index):
        raise MappingNotFoundError(
            "No usable dir_mappings configured (none of the work directories exist)"
        )

    current = current_dir.resolve()
    vault = cfg.vault.resolve()
    tag_root = cfg.tag_root_path.resolve()

    if _is_within(current, vault):
        if not _is_within(current, tag_root):
            raise OutsideTagRootError(f"{current} is not inside the tag root ({tag_root})")
        relative = PurePosixPath(*current.relative_to(tag_root).parts)
        work_dir = index.work_dir_for(relative)
        if work_dir is None:
            raise MappingNotFoundError(f"No dir mapping covers documentation dir: {relative}")
        plan = RenamePlan(
            direction=Direction.FROM_DOCS,
            doc_dir=current,
            work_dir=work_dir,
            new_name=new_name,
        )
    else:
        doc_dir = index.doc_dir_for(current, tag_root)
        if doc_dir is None:
            raise MappingNotFoundError(f"No dir mapping covers work dir: {current}")
        plan = RenamePlan(
            direction=Direction.FROM_WORK,
            doc_dir=doc_dir,
            work_dir=current,
            new_name=new_name,
        )

    if not plan.mirror_dir.is_dir():
        raise TargetNotFoundError(f"Mirror directory does not exist: {plan.mirror_dir}")
    for dest in (plan.new_doc_dir, plan.new_work_dir):
        if dest.exists():
            raise CollisionError(f"Directory already exists: {dest}")
    return plan


# ------------------------------------------------------------------
# Execution
# ------------------------------------------------------------------


def _dual_rename(plan: RenamePlan) -> None:
    if plan.direction is Direction.FROM_WORK:
        first = (plan.doc_dir, plan.new_doc_dir)
        second = (plan.work_dir, plan.new_work_dir)
    else:
        first = (plan.work_dir, plan.new_work_dir)
        second = (plan.doc_dir, plan.new_doc_dir)

    first[0].rename(first[1])
    try:
        second[0].rename(second[1])
    except OSError as exc:
        try:
            first[1].rename(first[0])
            rolled_back = True
        except OSError:
            rolled_back = False
        state = (
            f"'{first[1]}' was renamed back to '{first[0]}'"
            if rolled_back
            else f"'{first[0]}' is now '{first[1]}' — trees are out of sync"
        )
        raise CrossTreeRenameError(
            f"Renaming '{second[0]}' → '{second[1]}' failed: {exc}. {state}",
            rolled_back=rolled_back,
        ) from exc


def rename(
    cfg: VaultConfig,
    current_dir: Path,
    new_name: str,
    *,
    retag_after: bool = True,
    index: DirMappingIndex | None = None,
    now: datetime | None = None,
    on_item: OnItem | None = None,
) -> RenameResult:
    """Rename *current_dir* and its mirror to *new_name*, then retag the docs side."""
    plan = plan_rename(cfg, current_dir, new_name, index)
    _dual_rename(plan)

    result = RenameResult(plan=plan)
    if retag_after:
        result.retag_report = retag(
            cfg,
            plan.new_doc_dir,
            backup=False,
            keep_alias=True,
            now=now,
            on_item=on_item,
        )
    return result
