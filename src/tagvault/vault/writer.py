"""Whole-file document writes and pre-write backups.

Responsibilities:
  1. Write a document atomically (temp file in the same directory → rename).
  2. Copy the original to a flat backup directory before it is modified:
     ``<stem>_<YYYYMMDD_HHMMSS>.md.bak``; a ``_N`` counter is added when a
     backup with the same name already exists (same-second runs).
"""

from __future__ import annotations

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

_TIMESTAMP_FMT = "%Y%m%d_%H%M%S"


# ------------------------------------------------------------------
# Atomic write
# ------------------------------------------------------------------


def write_text_atomic(path: Path, content: str) -> None:
    """Write *content* to *path* atomically (temp → rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


# ------------------------------------------------------------------
# Backups
# ------------------------------------------------------------------


def backup_name(filename: str, now: datetime) -> str:
    """Backup filename for *filename*: ``note.md`` → ``note_20260202_131045.md.bak``."""
    stamp = now.strftime(_TIMESTAMP_FMT)
    if filename.endswith(".md"):
        return f"{filename[:-3]}_{stamp}.md.bak"
    return f"{filename}_{stamp}.bak"


def create_backup(file_path: Path, backup_dir: Path, now: datetime | None = None) -> Path:
    """Copy *file_path* into *backup_dir* and return the backup path.

    Raises:
        OSError: If the directory cannot be created or the copy fails.
    """
    backup_dir.mkdir(parents=True, exist_ok=True)
    name = backup_name(file_path.name, now or datetime.now())
    target = backup_dir / name

    ext = ".md.bak" if name.endswith(".md.bak") else ".bak"
    stem = name[: -len(ext)]
    counter = 1
    while target.exists():
        target = backup_dir / f"{stem}_{counter}{ext}"
        counter += 1

    shutil.copy2(file_path, target)
    return target
