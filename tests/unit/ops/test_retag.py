"""Tests for retag: location-derived primary tags."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from tagvault.config import VaultConfig
from tagvault.ops.base import ItemStatus, OutsideTagRootError, TargetNotFoundError
from tagvault.ops.retag import derive_tag, retag, retag_document
from tagvault.tags.scanner import extract_primary_tag
from tagvault.vault.document import Document

NOW = datetime(2026, 1, 5, 9, 30, 0)


def _primary(path: Path) -> str | None:
    tag = extract_primary_tag(Document.read(path).body)
    return str(tag) if tag is not None else None


# ------------------------------------------------------------------
# derive_tag
# ------------------------------------------------------------------


def test_derive_tag_from_directories(cfg: VaultConfig) -> None:
    path = cfg.tag_root_path / "proj" / "client" / "note.md"
    assert str(derive_tag(cfg.tag_root_path, path)) == "proj/client"


def test_derive_tag_directly_under_root_is_none(cfg: VaultConfig) -> None:
    assert derive_tag(cfg.tag_root_path, cfg.tag_root_path / "note.md") is None


def test_derive_tag_outside_root_raises(cfg: VaultConfig) -> None:
    with pytest.raises(OutsideTagRootError):
        derive_tag(cfg.tag_root_path, cfg.vault / "Other" / "note.md")


# ------------------------------------------------------------------
# retag_document
# ------------------------------------------------------------------


def test_retag_replaces_tag_and_keeps_alias(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "dev" / "new" / "note.md", "{ #dev/old }\n\nBody text\n")

    result = retag_document(cfg, path, now=NOW)

    assert result.status is ItemStatus.CHANGED
    assert result.detail == "dev/old → dev/new"
    doc = Document.read(path)
    assert doc.metadata["aliases"] == ["2026-01-05 dev/old"]
    assert doc.body == "{ #dev/new }\n\nBody text\n"


def test_retag_inserts_marker_when_missing(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "ideas" / "n.md", "# Title\n")

    result = retag_document(cfg, path, now=NOW)

    assert result.detail == "tagged ideas"
    assert path.read_text(encoding="utf-8") == "{ #ideas }\n\n# Title\n"


def test_retag_keeps_existing_frontmatter_and_aliases(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(
        cfg.tag_root_path / "b" / "n.md",
        "---\ntitle: Keep me\naliases:\n- earlier\n---\n{ #a }\ntext\n",
    )

    retag_document(cfg, path, now=NOW)

    doc = Document.read(path)
    assert doc.metadata == {"title": "Keep me", "aliases": ["earlier", "2026-01-05 a"]}
    assert doc.body == "{ #b }\ntext\n"


def test_retag_without_alias(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "b" / "n.md", "{ #a }\n")
    retag_document(cfg, path, keep_alias=False, now=NOW)
    assert path.read_text(encoding="utf-8") == "{ #b }\n"


def test_retag_without_alias_keeps_frontmatter_text(cfg: VaultConfig, write_doc) -> None:
    frontmatter = "---\n# keep me\ntitle: x\ncreated: 2024-01-05T10:00:00\n---\n"
    path = write_doc(cfg.tag_root_path / "b" / "n.md", frontmatter + "{ #a }\n")

    retag_document(cfg, path, keep_alias=False, now=NOW)

    assert path.read_text(encoding="utf-8") == frontmatter + "{ #b }\n"


def test_retag_keeps_text_after_marker(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "b" / "n.md", "{ #a } see also #x\n\ntext\n")
    retag_document(cfg, path, keep_alias=False, now=NOW)
    assert path.read_text(encoding="utf-8") == "{ #b } see also #x\n\ntext\n"


def test_retag_is_idempotent(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "dev" / "new" / "note.md", "{ #dev/old }\n")
    retag_document(cfg, path, now=NOW)
    after_first = path.read_text(encoding="utf-8")

    second = retag_document(cfg, path, now=NOW)

    assert second.status is ItemStatus.SKIPPED
    assert path.read_text(encoding="utf-8") == after_first


def test_retag_under_root_is_skipped(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "n.md", "{ #x }\n")
    result = retag_document(cfg, path, now=NOW)
    assert result.status is ItemStatus.SKIPPED
    assert path.read_text(encoding="utf-8") == "{ #x }\n"


def test_retag_backup_written_before_change(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "b" / "n.md", "{ #a }\n")

    retag_document(cfg, path, now=NOW)

    backup = cfg.backups_path / "n_20260105_093000.md.bak"
    assert backup.read_text(encoding="utf-8") == "{ #a }\n"


def test_retag_no_backup(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "b" / "n.md", "{ #a }\n")
    retag_document(cfg, path, backup=False, now=NOW)
    assert not cfg.backups_path.exists()


# ------------------------------------------------------------------
# retag (batch)
# ------------------------------------------------------------------


def test_retag_directory_batch(cfg: VaultConfig, write_doc) -> None:
    root = cfg.tag_root_path
    write_doc(root / "dev" / "proj" / "a.md", "{ #old }\n")
    write_doc(root / "dev" / "proj" / "b.md", "{ #dev/proj }\n")
    write_doc(root / "dev" / "proj" / "c.md", "plain\n")

    report = retag(cfg, root / "dev", now=NOW)

    assert (report.changed, report.skipped, report.errored) == (2, 1, 0)
    assert _primary(root / "dev" / "proj" / "a.md") == "dev/proj"
    assert _primary(root / "dev" / "proj" / "c.md") == "dev/proj"


def test_retag_single_file_target(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.tag_root_path / "x" / "a.md", "text\n")
    other = write_doc(cfg.tag_root_path / "x" / "b.md", "text\n")

    report = retag(cfg, path, now=NOW)

    assert len(report.items) == 1
    assert _primary(path) == "x"
    assert _primary(other) is None


def test_retag_error_does_not_stop_batch(cfg: VaultConfig, write_doc) -> None:
    root = cfg.tag_root_path
    write_doc(root / "t" / "a_bad.md", "---\ntags: [unclosed\n---\nbody\n")
    write_doc(root / "t" / "b_good.md", "body\n")
    seen = []

    report = retag(cfg, root / "t", now=NOW, on_item=seen.append)

    assert report.errored == 1
    assert report.changed == 1
    assert [r.status for r in seen] == [ItemStatus.ERROR, ItemStatus.CHANGED]
    assert _primary(root / "t" / "b_good.md") == "t"


def test_retag_outside_tag_root_is_item_error(cfg: VaultConfig, write_doc) -> None:
    path = write_doc(cfg.vault / "Inbox" / "n.md", "text\n")
    report = retag(cfg, path, now=NOW)
    assert report.errored == 1
    assert "not inside the tag root" in report.errors[0].detail


def test_retag_skips_templates(cfg: VaultConfig, write_doc) -> None:
    cfg.tag_root = "."
    template = write_doc(cfg.templates_path / "daily.md", "{ #template }\n")
    report = retag(cfg, cfg.vault, now=NOW)
    assert report.items == []
    assert template.read_text(encoding="utf-8") == "{ #template }\n"


def test_retag_missing_target(cfg: VaultConfig) -> None:
    with pytest.raises(TargetNotFoundError):
        retag(cfg, cfg.tag_root_path / "nope")
