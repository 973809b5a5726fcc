"""Tests for VaultWalker."""

from __future__ import annotations

from pathlib import Path

from tagvault.vault.walker import VaultWalker


def _names(paths: list[Path], root: Path) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


def test_walks_markdown_in_sorted_order(vault: Path, write_doc) -> None:
    write_doc(vault / "Notas" / "b.md", "b")
    write_doc(vault / "Notas" / "a.md", "a")
    write_doc(vault / "Notas" / "sub" / "c.md", "c")
    write_doc(vault / "Notas" / "image.png", "x")

    paths = VaultWalker(vault / "Notas").paths()

    assert _names(paths, vault) == ["Notas/a.md", "Notas/b.md", "Notas/sub/c.md"]


def test_skips_hidden_directories(vault: Path, write_doc) -> None:
    write_doc(vault / ".arc" / "backups" / "x.md", "x")
    write_doc(vault / ".obsidian" / "y.md", "y")
    write_doc(vault / "Notas" / "z.md", "z")

    assert _names(VaultWalker(vault).paths(), vault) == ["Notas/z.md"]


def test_hidden_directories_can_be_included(vault: Path, write_doc) -> None:
    write_doc(vault / ".hidden" / "x.md", "x")
    paths = VaultWalker(vault, exclude_hidden=False).paths()
    assert ".hidden/x.md" in _names(paths, vault)


def test_skips_templates_dir(vault: Path, write_doc) -> None:
    write_doc(vault / "Templates" / "daily.md", "t")
    write_doc(vault / "Notas" / "n.md", "n")

    walker = VaultWalker(vault, templates_path=vault / "Templates")

    assert _names(walker.paths(), vault) == ["Notas/n.md"]


def test_walk_yields_text(vault: Path, write_doc) -> None:
    write_doc(vault / "Notas" / "n.md", "hello")
    assert list(VaultWalker(vault).walk()) == [(vault / "Notas" / "n.md", "hello")]


def test_walk_skips_undecodable_files(vault: Path, write_doc) -> None:
    (vault / "Notas" / "bad.md").write_bytes(b"\xff\xfe\x00bad")
    write_doc(vault / "Notas" / "good.md", "ok")

    texts = [text for _, text in VaultWalker(vault).walk()]

    assert texts == ["ok"]


def test_missing_root_yields_nothing(tmp_path: Path) -> None:
    assert VaultWalker(tmp_path / "nope").paths() == []
