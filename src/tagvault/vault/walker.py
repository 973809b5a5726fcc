"""Directory walker over a vault's Markdown documents."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

_DOC_EXTS = {".md"}


class VaultWalker:
    """Yield ``(path, text)`` for every ``.md`` file below *root*.

    Hidden directories (``.git``, ``.arc``, ...) and the templates directory
    are pruned. Entries are visited in sorted order so batch output is stable.
    Files that cannot be read or decoded are skipped.
    """

    def __init__(
        self,
        root: Path,
        *,
        exclude_hidden: bool = True,
        templates_path: Path | None = None,
    ) -> None:
        self.root = root
        self.exclude_hidden = exclude_hidden
        self.templates_path = templates_path.resolve() if templates_path else None

    def paths(self) -> list[Path]:
        """Collect document paths up front (safe when the walk target is mutated)."""
        return list(self._iter_paths(self.root))

    def walk(self) -> Iterator[tuple[Path, str]]:
        for path in self._iter_paths(self.root):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            yield path, text

    def _iter_paths(self, directory: Path) -> Iterator[Path]:
        if not directory.is_dir():
            return
        try:
            entries = sorted(directory.iterdir())
        except PermissionError:
            return
        for entry in entries:
            if entry.is_dir():
                if self._skip_dir(entry):
                    continue
                yield from self._iter_paths(entry)
            elif entry.is_file() and entry.suffix.lower() in _DOC_EXTS:
                yield entry

    def _skip_dir(self, entry: Path) -> bool:
        if self.exclude_hidden and entry.name.startswith("."):
            return True
        return self.templates_path is not None and entry.resolve() == self.templates_path
