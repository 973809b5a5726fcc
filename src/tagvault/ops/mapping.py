"""Bidirectional index over the configured work-dir → doc-subpath mappings.

Built once per operation. Work prefixes are canonicalised (symlinks resolved)
and both sides are ordered longest-first, so the first hit is the longest
matching prefix. Mappings whose work directory does not exist are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class DirMapping:
    work_prefix: Path
    doc_subpath: PurePosixPath


@dataclass(frozen=True)
class MappingMatch:
    mapping: DirMapping
    remainder: PurePosixPath

    @property
    def parts(self) -> tuple[str, ...]:
        return self.remainder.parts


def _relative(path: PurePosixPath | Path, prefix: PurePosixPath | Path) -> PurePosixPath | None:
    try:
        return PurePosixPath(*path.relative_to(prefix).parts)
    except ValueError:
        return None


class DirMappingIndex:
    def __init__(self, mappings: list[DirMapping]) -> None:
        self.mappings = list(mappings)
        self._by_work = sorted(self.mappings, key=lambda m: len(m.work_prefix.parts), reverse=True)
        self._by_doc = sorted(self.mappings, key=lambda m: len(m.doc_subpath.parts), reverse=True)

    @classmethod
    def build(cls, raw: dict[str, str]) -> DirMappingIndex:
        mappings: list[DirMapping] = []
        for work, doc in raw.items():
            work_path = Path(work).expanduser()
            if not work_path.is_dir():
                continue
            mappings.append(
                DirMapping(
                    work_prefix=work_path.resolve(),
                    doc_subpath=PurePosixPath(*PurePosixPath(doc).parts),
                )
            )
        return cls(mappings)

    def __len__(self) -> int:
        return len(self.mappings)

    def match_work(self, directory: Path) -> MappingMatch | None:
        """Longest mapping whose work prefix contains *directory* (canonicalised)."""
        resolved = directory.resolve()
        for mapping in self._by_work:
            rest = _relative(resolved, mapping.work_prefix)
            if rest is not None:
                return MappingMatch(mapping, rest)
        return None

    def match_doc(self, relative: PurePosixPath) -> MappingMatch | None:
        """Longest mapping whose doc subpath prefixes *relative* (relative to tag root)."""
        for mapping in self._by_doc:
            rest = _relative(relative, mapping.doc_subpath)
            if rest is not None:
                return MappingMatch(mapping, rest)
        return None

    def doc_dir_for(self, work_dir: Path, tag_root: Path) -> Path | None:
        """Documentation dir mirroring *work_dir*, or None when no mapping covers it."""
        match = self.match_work(work_dir)
        if match is None:
            return None
        return tag_root.joinpath(*match.mapping.doc_subpath.parts, *match.parts)

    def work_dir_for(self, relative: PurePosixPath) -> Path | None:
        """Work dir mirroring *relative* (a path under the tag root), or None."""
        match = self.match_doc(relative)
        if match is None:
            return None
        return match.mapping.work_prefix.joinpath(*match.parts)
